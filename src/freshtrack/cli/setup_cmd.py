#!/usr/bin/env python3
"""
Store credentials setup

Writes the hosted table URL and API key into .env so that the freshtrack
command can find them.

Usage:
  freshtrack-setup
  freshtrack-setup --url https://abcd1234.supabase.co --key <API_KEY>
  freshtrack-setup --url ... --key ... --table products --env .env
"""

import argparse
import getpass
import os
import sys

from dotenv import load_dotenv


def update_env(updates: dict[str, str], env_path: str = ".env"):
    """
    Update keys in a .env file.
    Existing keys get the new value, new keys are appended, other lines stay.
    """
    lines = []
    found_keys = set()

    if os.path.exists(env_path):
        with open(env_path, "r", encoding="utf-8") as f:
            for line in f:
                key = line.split("=", 1)[0].strip() if "=" in line else None
                if key and key in updates:
                    lines.append(f'{key}="{updates[key]}"\n')
                    found_keys.add(key)
                else:
                    lines.append(line)

    if lines and not lines[-1].endswith("\n"):
        lines[-1] += "\n"
    for key, value in updates.items():
        if key not in found_keys:
            lines.append(f'{key}="{value}"\n')

    with open(env_path, "w", encoding="utf-8") as f:
        f.writelines(lines)


def main(argv=None):
    parser = argparse.ArgumentParser(description="freshtrack store setup")
    parser.add_argument("--url", help="store URL (e.g. https://abcd1234.supabase.co)")
    parser.add_argument("--key", help="store API key (prompted when omitted)")
    parser.add_argument("--table", help="products table name (default: products)")
    parser.add_argument("--env", default=".env", help=".env file path (default: .env)")
    args = parser.parse_args(argv)

    load_dotenv(args.env)

    url = args.url or os.getenv("SUPABASE_URL") or input("Store URL: ").strip()
    key = args.key or os.getenv("SUPABASE_KEY") or getpass.getpass("API key: ").strip()

    if not url or not key:
        print("Error: store URL and API key are required.", file=sys.stderr)
        sys.exit(1)

    updates = {"SUPABASE_URL": url.rstrip("/"), "SUPABASE_KEY": key}
    if args.table:
        updates["FRESHTRACK_TABLE"] = args.table

    update_env(updates, args.env)
    print(f"Saved {', '.join(updates)} to {args.env}")


if __name__ == "__main__":
    main()
