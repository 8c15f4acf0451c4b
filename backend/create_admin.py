#!/usr/bin/env python3
"""
Bootstrap an ADMIN account.

The API never grants ADMIN (role assignment only accepts TEACHER and STUDENT),
so the first administrator is created, or an existing account promoted, here.

Usage:
    python create_admin.py --username admin --email admin@example.com
    python create_admin.py --username alice --promote
"""

import argparse
import getpass
import sys

from rich.console import Console

from api.dependencies import get_container
from modules.users.exceptions import EmailAlreadyExistsError, UsernameAlreadyExistsError
from shared.models import Role

console = Console()


def promote(username: str) -> int:
    users = get_container().user_repository
    user = users.get_by_username(username)
    if user is None:
        console.print(f"[red]Error:[/red] no user named '{username}'")
        return 1
    users.update(user.id, {"role": Role.ADMIN.value})
    console.print(f"[green]✓[/green] {username} is now ADMIN")
    return 0


def create(username: str, email: str, full_name: str | None, password: str | None) -> int:
    container = get_container()
    if not password:
        password = getpass.getpass("Password: ")
        if password != getpass.getpass("Repeat password: "):
            console.print("[red]Error:[/red] passwords do not match")
            return 1

    try:
        user = container.user_repository.create(
            {
                "username": username,
                "email": email,
                "full_name": full_name,
                "password_hash": container.hasher.hash(password),
                "role": Role.ADMIN.value,
                "balance": 0.0,
            }
        )
    except (UsernameAlreadyExistsError, EmailAlreadyExistsError) as e:
        console.print(f"[red]Error:[/red] {e.message}")
        return 1

    console.print(f"[green]✓[/green] created ADMIN {user.username} (id {user.id})")
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Create or promote a Lectern administrator")
    parser.add_argument("--username", required=True)
    parser.add_argument("--email", help="Email for a new account")
    parser.add_argument("--full-name")
    parser.add_argument("--password", help="Prompted for when omitted")
    parser.add_argument("--promote", action="store_true", help="Promote an existing account")
    args = parser.parse_args()

    if args.promote:
        sys.exit(promote(args.username))
    if not args.email:
        parser.error("--email is required when creating a new account")
    sys.exit(create(args.username, args.email, args.full_name, args.password))


if __name__ == "__main__":
    main()
