"""
Create a user (e.g. the first admin, since is_admin can otherwise only be set by an admin).
Run from project root:
  python -m app.scripts.create_user EMAIL NAME PASSWORD [--admin]
Example:
  python -m app.scripts.create_user admin@example.com "Site Admin" your-secure-password --admin
"""
import argparse
import sys

from app.core.database import SessionLocal
from app.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN, hash_password
from app.models.user import User
from app.schemas.auth import normalize_email


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Teamwork user from the command line.")
    parser.add_argument("email", help="Email address (unique, at most 255 chars)")
    parser.add_argument("name", help="Display name (1-255 chars)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("--admin", action="store_true", help="Grant admin rights")
    args = parser.parse_args(argv)

    email = normalize_email(args.email)
    name = args.name.strip()
    if "@" not in email or len(email) > 255:
        print("Invalid email address.", file=sys.stderr)
        return 1
    if not name or len(name) > 255:
        print("Invalid name length.", file=sys.stderr)
        return 1
    if not PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN:
        print(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.",
            file=sys.stderr,
        )
        return 1

    db = SessionLocal()
    try:
        existing = db.query(User).filter(User.email == email).first()
        if existing:
            print(f"User '{email}' already exists.", file=sys.stderr)
            return 1
        user = User(
            name=name,
            email=email,
            password_hash=hash_password(args.password),
            is_admin=args.admin,
        )
        db.add(user)
        db.commit()
        role = "admin" if args.admin else "user"
        print(f"Created {role} '{email}' with id {user.id}.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
