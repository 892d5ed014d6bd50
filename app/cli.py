"""Operator commands: `car-rental-admin init-db` / `car-rental-admin create-admin EMAIL PASSWORD`."""
import argparse
import logging

from app.database import SessionLocal, create_tables
from app.seed import seed_roles, ensure_admin

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    parser = argparse.ArgumentParser(prog="car-rental-admin")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("init-db", help="Create tables and seed roles")
    admin = sub.add_parser("create-admin", help="Create an admin account, or promote an existing one")
    admin.add_argument("email")
    admin.add_argument("password")
    args = parser.parse_args(argv)

    create_tables()
    db = SessionLocal()
    try:
        seed_roles(db)
        if args.command == "create-admin":
            user = ensure_admin(db, args.email, args.password)
            print(f"Admin ready: {user.email} (id={user.id})")
    finally:
        db.close()


if __name__ == "__main__":
    main()
