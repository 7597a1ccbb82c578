#!/usr/bin/env python3
"""Apply the MindWell schema (tables, indexes, RLS policies) to Supabase Postgres."""

import os
import sys

import psycopg2
from dotenv import load_dotenv

load_dotenv()

MIGRATION_PATH = os.path.join(os.path.dirname(__file__), '..', 'migrations', '001_mindwell_schema.sql')


def main():
    conn_str = os.getenv('DATABASE_URL')
    if not conn_str:
        print("DATABASE_URL is not set (use the Supabase pooler connection string)")
        sys.exit(1)

    print(f"Reading migration from: {MIGRATION_PATH}")
    with open(MIGRATION_PATH, 'r') as f:
        sql = f.read()

    print("Connecting to Supabase...")
    conn = psycopg2.connect(conn_str)
    conn.autocommit = True

    print("Executing migration...")
    cur = conn.cursor()
    cur.execute(sql)
    print("✅ Migration executed successfully!")

    for table in ('mood_entries', 'journal_entries'):
        cur.execute(
            "SELECT column_name, data_type FROM information_schema.columns "
            "WHERE table_schema = 'public' AND table_name = %s ORDER BY ordinal_position",
            (table,),
        )
        print(f"\n{table} table columns:")
        for col_name, col_type in cur.fetchall():
            print(f"  - {col_name}: {col_type}")

    cur.close()
    conn.close()


if __name__ == '__main__':
    main()
