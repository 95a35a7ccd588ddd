#!/usr/bin/env python3
"""Helper script to check and create the .env file used by the API."""

from pathlib import Path

REQUIRED_KEYS = ("MONTAROTA_SUPABASE_URL", "MONTAROTA_SUPABASE_KEY", "MONTAROTA_JWT_SECRET")
SECRET_KEYS = ("MONTAROTA_SUPABASE_KEY", "MONTAROTA_JWT_SECRET")

TEMPLATE = """# Supabase Configuration (Required for database storage)
# Get these from: https://supabase.com/dashboard -> Your Project -> Settings -> API
MONTAROTA_SUPABASE_URL=https://your-project-id.supabase.co
MONTAROTA_SUPABASE_KEY=your-service-role-key-here

# Token signing
MONTAROTA_JWT_SECRET=change-in-production
# MONTAROTA_TOKEN_EXPIRE_DAYS=30

# API Configuration
MONTAROTA_API_PREFIX=/api
MONTAROTA_LOG_LEVEL=INFO
# MONTAROTA_FRONTEND_ALLOWED_ORIGINS - JSON array or comma-separated list
# MONTAROTA_GPS_REQUIRES_AUTH=false

# Business rules
# MONTAROTA_PLATFORM_FEE=4.50
# MONTAROTA_DEFAULT_PREPARATION_MINUTES=20
"""


def _mask(line: str) -> str:
    key, _, value = line.partition("=")
    value = value.strip()
    if key.strip() in SECRET_KEYS and len(value) > 20:
        return f"{key}={value[:6]}...{value[-4:]}"
    return line


def main() -> None:
    env_file = Path(__file__).parent / ".env"

    print("=" * 60)
    print("Monta a Rota environment checker")
    print("=" * 60)

    if not env_file.exists():
        env_file.write_text(TEMPLATE, encoding="utf-8")
        print(f"Created template .env file at: {env_file}")
        print("Fill in the Supabase credentials and the JWT secret, then re-run this script.")
        return

    lines = env_file.read_text(encoding="utf-8").splitlines()
    print(f"Found .env file at: {env_file}")
    print("-" * 60)
    for line in lines:
        print(_mask(line))
    print("-" * 60)

    configured = {
        line.partition("=")[0].strip()
        for line in lines
        if "=" in line and not line.lstrip().startswith("#") and line.partition("=")[2].strip()
    }
    missing = [key for key in REQUIRED_KEYS if key not in configured]
    if missing:
        print(f"Missing values: {', '.join(missing)}")
    else:
        print("All required variables are set.")


if __name__ == "__main__":
    main()
