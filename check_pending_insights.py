"""Check recent journal entries that never received an AI insight."""
import os
from dotenv import load_dotenv
load_dotenv()

from supabase import create_client

s = create_client(os.getenv('SUPABASE_URL'), os.getenv('SUPABASE_SERVICE_ROLE_KEY'))

r = s.table('journal_entries').select(
    'id,user_id,created_at'
).is_('ai_insight', 'null').order('created_at', desc=True).limit(25).execute()

print("Journal entries without an AI insight:")
print("-" * 80)
for x in r.data:
    created = x['created_at'][:16] if x['created_at'] else 'N/A'
    print(f"{x['id']}  owner={x['user_id'][:8]}  {created}")

print(f"\nTotal shown: {len(r.data)}")
