from __future__ import annotations

import argparse
import asyncio
import getpass
import logging
import sys

from igreja.auth.roles import ROLE_VALUES
from igreja.client.api import AuthApi
from igreja.client.config import ClientSettings
from igreja.client.routing import RouteDecision, guard
from igreja.client.session import SessionManager
from igreja.client.storage import FileTokenStore
from igreja.core.errors import AuthError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="igreja", description="Sign in to the Igreja API.")
    parser.add_argument("--api-url", help="Base URL of the API (defaults to IGREJA_API_URL)")
    parser.add_argument("--token-file", help="Where the session token is persisted (defaults to IGREJA_TOKEN_FILE)")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    register = commands.add_parser("register", help="Create a new account")
    register.add_argument("--name", required=True)
    register.add_argument("--email", required=True)
    register.add_argument("--role", choices=ROLE_VALUES, help="Defaults to the lowest role")
    register.add_argument("--password", help="Prompted for when omitted")

    login = commands.add_parser("login", help="Sign in and persist the session")
    login.add_argument("--email", required=True)
    login.add_argument("--password", help="Prompted for when omitted")

    commands.add_parser("logout", help="Discard the persisted session")
    commands.add_parser("whoami", help="Show the signed-in account")

    can = commands.add_parser("can", help="Check whether the session holds a role")
    can.add_argument("role", choices=ROLE_VALUES)
    return parser


def _password(args: argparse.Namespace) -> str:
    return args.password or getpass.getpass("Password: ")


async def run(args: argparse.Namespace, settings: ClientSettings | None = None, api: AuthApi | None = None) -> int:
    settings = settings or ClientSettings()
    store = FileTokenStore(args.token_file or settings.TOKEN_FILE)
    api = api or AuthApi(args.api_url or settings.API_URL, timeout=settings.REQUEST_TIMEOUT_SECONDS)

    async with api:
        session = SessionManager(api, store)
        await session.bootstrap()
        try:
            if args.command == "register":
                user = await api.register(args.name, args.email, _password(args), role=args.role)
                print(f"Created {user.email} ({user.role.value})")
            elif args.command == "login":
                user = await session.login(args.email, _password(args))
                print(f"Logged in as {user.name} ({user.role.value})")
            elif args.command == "logout":
                try:
                    if session.is_authenticated:
                        await api.logout()
                finally:
                    session.logout()
                print("Logged out")
            elif args.command == "whoami":
                if guard(session) is not RouteDecision.ALLOW:
                    print("Not logged in", file=sys.stderr)
                    return 1
                user = session.current_user
                print(f"{user.name} <{user.email}> role={user.role.value} id={user.id}")
            elif args.command == "can":
                allowed = guard(session, args.role) is RouteDecision.ALLOW
                print("yes" if allowed else "no")
                return 0 if allowed else 1
        except AuthError as exc:
            logger.debug("command_failed", extra={"command": args.command, "code": exc.code})
            print(f"Error: {exc.message}", file=sys.stderr)
            return 1
    return 0


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    raise SystemExit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
