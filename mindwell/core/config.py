import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

_SUPABASE_URL = os.getenv('SUPABASE_URL')
_SUPABASE_ANON_KEY = os.getenv('SUPABASE_ANON_KEY')
_SUPABASE_SERVICE_ROLE_KEY = os.getenv('SUPABASE_SERVICE_ROLE_KEY')

_ANTHROPIC_API_KEY = os.getenv('ANTHROPIC_API_KEY') or os.getenv('CLAUDE_API_KEY')

_CLAUDE_MODEL_PRIMARY = os.getenv('CLAUDE_MODEL_PRIMARY') or os.getenv('CLAUDE_MODEL', 'claude-3-5-haiku-20241022')

_CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv('CORS_ORIGINS', 'http://localhost:3000').split(',')
    if origin.strip()
]


class Config:
    """Central configuration for the MindWell service."""

    SERVICE_NAME = os.getenv('SERVICE_NAME', 'mindwell-service')

    SUPABASE_URL = _SUPABASE_URL
    SUPABASE_ANON_KEY = _SUPABASE_ANON_KEY
    SUPABASE_SERVICE_ROLE_KEY = _SUPABASE_SERVICE_ROLE_KEY

    ANTHROPIC_API_KEY = _ANTHROPIC_API_KEY

    CLAUDE_MODEL_PRIMARY = _CLAUDE_MODEL_PRIMARY

    INSIGHT_MAX_TOKENS = int(os.getenv('INSIGHT_MAX_TOKENS', '200'))
    INSIGHT_TEMPERATURE = float(os.getenv('INSIGHT_TEMPERATURE', '0.7'))
    INSIGHT_TIMEOUT_SECONDS = float(os.getenv('INSIGHT_TIMEOUT_SECONDS', '30'))

    # Wait between the annotation update and the follow-up list read
    REFRESH_DELAY_SECONDS = float(os.getenv('REFRESH_DELAY_SECONDS', '2.0'))

    DEFAULT_LIST_LIMIT = int(os.getenv('DEFAULT_LIST_LIMIT', '20'))
    MAX_LIST_LIMIT = int(os.getenv('MAX_LIST_LIMIT', '100'))

    AUTH_REDIRECT_URL = os.getenv('AUTH_REDIRECT_URL')
    CORS_ORIGINS = _CORS_ORIGINS

    DATABASE_URL = os.getenv('DATABASE_URL')

    OTEL_ENABLED = os.getenv('OTEL_ENABLED', 'false').lower() == 'true'
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    ENVIRONMENT = os.getenv('ENVIRONMENT', 'production')

    def missing_settings(self) -> list[str]:
        """Names of required settings that are not configured."""
        required = {
            'SUPABASE_URL': self.SUPABASE_URL,
            'SUPABASE_ANON_KEY': self.SUPABASE_ANON_KEY,
            'SUPABASE_SERVICE_ROLE_KEY': self.SUPABASE_SERVICE_ROLE_KEY,
            'ANTHROPIC_API_KEY': self.ANTHROPIC_API_KEY,
        }
        return [name for name, value in required.items() if not value]


settings = Config()
