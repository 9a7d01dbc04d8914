#!/usr/bin/env python3
"""Admin command line for the storefront catalog.

The CLI is the "running client": it keeps one admin session in a local file
between invocations, and every write command requires that session.

Examples:
    storefront-admin login alice
    storefront-admin products add name="Walk-in screen" category=shower-screens price=499.0
    storefront-admin products update <id> price=459.0
    storefront-admin gallery list
"""
import argparse
import asyncio
import getpass
import json
import logging
import sys
from typing import Any

from storefront.core.config import Settings, get_settings
from storefront.core.exceptions import NotFound, StorefrontError, Unauthorized
from storefront.models.user import UserRole
from storefront.services.auth.session import SessionManager
from storefront.services.auth.store import FileSessionStore
from storefront.services.auth.users import UserDirectory
from storefront.services.firestore.client import FirestoreClient
from storefront.services.firestore.collections import (
    CatalogCollection,
    GalleryCollection,
    ProductCollection,
    VideoCollection,
)

logger = logging.getLogger(__name__)


class AdminContext:
    """Wires settings, client, session and collections for one invocation."""

    def __init__(self, config: Settings, session: SessionManager | None = None):
        self.config = config
        self.client = FirestoreClient(config)
        self.users = UserDirectory(self.client)
        if session is None:
            session = SessionManager(
                self.users, FileSessionStore(config.session_file), config
            )
            session.restore()
        self.session = session
        self.collections: dict[str, CatalogCollection] = {
            "products": ProductCollection(self.client, self.session),
            "gallery": GalleryCollection(self.client, self.session),
            "videos": VideoCollection(self.client, self.session),
        }


def parse_value(raw: str) -> Any:
    """JSON-decode a CLI value when possible, otherwise keep the string."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def parse_fields(pairs: list[str]) -> dict[str, Any]:
    fields = {}
    for pair in pairs:
        key, sep, raw = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Expected key=value, got {pair!r}")
        fields[key] = parse_value(raw)
    return fields


def emit(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


async def run_login(ctx: AdminContext, args: argparse.Namespace) -> int:
    password = args.password if args.password is not None else getpass.getpass("Password: ")
    if await ctx.session.login(args.username, password):
        print(f"Logged in as {args.username}")
        return 0
    print("Login failed: invalid username or password", file=sys.stderr)
    return 1


async def run_collection(ctx: AdminContext, args: argparse.Namespace) -> int:
    collection = ctx.collections[args.command]
    action = args.action

    if action == "list":
        if args.command == "products" and args.category:
            emit(await collection.list_by_category(args.category))
        else:
            emit(await collection.list_all())
        return 0

    if action == "get":
        record = await collection.get(args.id)
        if record is None:
            raise NotFound(f"{args.command}/{args.id} not found")
        emit(record)
        return 0

    if action == "add":
        emit(await collection.create(parse_fields(args.fields)))
    elif action == "update":
        emit(await collection.update(args.id, parse_fields(args.fields)))
    elif action == "delete":
        await collection.delete(args.id)
        print(f"Deleted {args.command}/{args.id}")

    ctx.session.touch()
    return 0


async def run_users(ctx: AdminContext, args: argparse.Namespace) -> int:
    action = args.action

    if action == "bootstrap":
        if await ctx.users.list_users():
            print("Users already exist; log in and use 'users add' instead", file=sys.stderr)
            return 1
        password = args.password or getpass.getpass("Password: ")
        user = await ctx.users.create_user(args.username, password, email=args.email or "")
        emit(user.public_dict())
        return 0

    ctx.session.require_authenticated()

    if action == "list":
        emit([user.public_dict() for user in await ctx.users.list_users()])
    elif action == "add":
        password = args.password or getpass.getpass("Password: ")
        user = await ctx.users.create_user(
            args.username, password, email=args.email or "", role=args.role
        )
        emit(user.public_dict())
    elif action == "update":
        await ctx.users.update_user(
            args.id,
            password=args.password,
            email=args.email,
            role=args.role,
            active=args.active,
        )
        print(f"Updated user {args.id}")
    elif action == "delete":
        await ctx.users.delete_user(args.id)
        print(f"Deleted user {args.id}")

    ctx.session.touch()
    return 0


async def run(ctx: AdminContext, args: argparse.Namespace) -> int:
    if args.command == "login":
        return await run_login(ctx, args)

    if args.command == "logout":
        ctx.session.logout()
        print("Logged out")
        return 0

    if args.command == "whoami":
        if not ctx.session.is_authenticated():
            print("Not logged in", file=sys.stderr)
            return 1
        emit(ctx.session.current_user.model_dump(by_alias=True, exclude={"token"}))
        return 0

    if args.command == "users":
        return await run_users(ctx, args)

    return await run_collection(ctx, args)


def _add_collection_parser(subparsers, name: str, actions: list[str]) -> None:
    parser = subparsers.add_parser(name, help=f"Manage {name}")
    sub = parser.add_subparsers(dest="action", required=True)

    list_parser = sub.add_parser("list", help=f"List {name}, newest first")
    if name == "products":
        list_parser.add_argument("--category", help="Only products of this category")

    if "get" in actions:
        get_parser = sub.add_parser("get", help="Show one document")
        get_parser.add_argument("id")

    add_parser = sub.add_parser("add", help="Create a document from key=value fields")
    add_parser.add_argument("fields", nargs="+", metavar="key=value")

    if "update" in actions:
        update_parser = sub.add_parser("update", help="Patch the given key=value fields")
        update_parser.add_argument("id")
        update_parser.add_argument("fields", nargs="+", metavar="key=value")

    delete_parser = sub.add_parser("delete", help="Delete a document")
    delete_parser.add_argument("id")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="storefront-admin",
        description="Storefront catalog administration",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    login_parser = subparsers.add_parser("login", help="Start an admin session")
    login_parser.add_argument("username")
    login_parser.add_argument("--password", help="Prompted for when omitted")

    subparsers.add_parser("logout", help="End the admin session")
    subparsers.add_parser("whoami", help="Show the current session")

    _add_collection_parser(subparsers, "products", ["get", "update"])
    _add_collection_parser(subparsers, "gallery", [])
    _add_collection_parser(subparsers, "videos", [])

    users_parser = subparsers.add_parser("users", help="Manage admin users")
    users_sub = users_parser.add_subparsers(dest="action", required=True)
    users_sub.add_parser("list", help="List users")

    add_user = users_sub.add_parser("add", help="Create a user")
    add_user.add_argument("username")
    add_user.add_argument("--password")
    add_user.add_argument("--email")
    add_user.add_argument("--role", choices=[r.value for r in UserRole], default=UserRole.ADMIN.value)

    update_user = users_sub.add_parser("update", help="Update a user")
    update_user.add_argument("id")
    update_user.add_argument("--password")
    update_user.add_argument("--email")
    update_user.add_argument("--role", choices=[r.value for r in UserRole])
    active = update_user.add_mutually_exclusive_group()
    active.add_argument("--active", dest="active", action="store_true", default=None)
    active.add_argument("--inactive", dest="active", action="store_false", default=None)

    delete_user = users_sub.add_parser("delete", help="Delete a user")
    delete_user.add_argument("id")

    bootstrap = users_sub.add_parser("bootstrap", help="Create the first admin (empty users collection only)")
    bootstrap.add_argument("username")
    bootstrap.add_argument("--password")
    bootstrap.add_argument("--email")

    return parser


def main(argv: list[str] | None = None, ctx: AdminContext | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = ctx.config if ctx is not None else get_settings()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        ctx = ctx or AdminContext(config)
        return asyncio.run(run(ctx, args))
    except Unauthorized as e:
        print(str(e), file=sys.stderr)
        return 1
    except (StorefrontError, ValueError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
