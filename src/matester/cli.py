#!/usr/bin/env python3
"""Matester CLI for inspecting and linking users."""

import argparse
import sys

import questionary
from rich.console import Console
from rich.table import Table

from matester.db import Database
from matester.errors import RepositoryError
from matester.user import User, UserRepository

console = Console()


def render_users(title: str, users: list[User]) -> None:
    """Print users as a table."""
    if not users:
        console.print(f"[dim]{title}: none.[/]")
        return
    table = Table(title=title)
    for column in ("id", "login", "name", "birth date", "gender", "city"):
        table.add_column(column)
    for u in users:
        name = " ".join(part for part in (u.first_name, u.last_name) if part)
        table.add_row(
            str(u.id),
            u.login,
            name,
            str(u.birth_date or ""),
            u.gender or "",
            u.city or "",
        )
    console.print(table)


def list_users(repo: UserRepository, args) -> None:
    """List every user."""
    render_users("Users", repo.list_users())


def show_profile(repo: UserRepository, args) -> None:
    """Show a user's profile and hobbies."""
    profile = repo.get_user_profile(args.login)
    render_users("Profile", [profile.user])
    hobbies = ", ".join(profile.hobbies) if profile.hobbies else "[dim]none[/]"
    console.print(f"Hobbies: {hobbies}")


def list_friends(repo: UserRepository, args) -> None:
    """List a user's friends."""
    user_id = repo.get_user_id(args.login)
    render_users(f"Friends of {args.login}", repo.list_friends(user_id))


def add_friend(repo: UserRepository, args) -> None:
    """Record a friendship between two users."""
    user_id = repo.get_user_id(args.login)
    friend_id = repo.get_user_id(args.friend)

    console.print(f"[yellow]Will add [bold]{args.friend}[/] as a friend of [bold]{args.login}[/].[/]")
    if not questionary.confirm("Proceed with these changes?").ask():
        console.print("[dim]Cancelled.[/]")
        return

    repo.add_friend(user_id, friend_id)
    console.print(f"[green]{args.login} and {args.friend} are now friends.[/]")


def add_hobby(repo: UserRepository, args) -> None:
    """Link a hobby to a user."""
    user_id = repo.get_user_id(args.login)

    console.print(f"[yellow]Will add hobby [bold]{args.hobby}[/] to [bold]{args.login}[/].[/]")
    if not questionary.confirm("Proceed with these changes?").ask():
        console.print("[dim]Cancelled.[/]")
        return

    repo.add_hobby(user_id, args.hobby)
    console.print(f"[green]Added {args.hobby} to {args.login}.[/]")


COMMANDS = {
    "list-users": list_users,
    "profile": show_profile,
    "friends": list_friends,
    "add-friend": add_friend,
    "add-hobby": add_hobby,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Matester CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list-users", help="List all users")

    profile = subparsers.add_parser("profile", help="Show a user's profile")
    profile.add_argument("login")

    friends = subparsers.add_parser("friends", help="List a user's friends")
    friends.add_argument("login")

    friend = subparsers.add_parser("add-friend", help="Add a friend to a user")
    friend.add_argument("login")
    friend.add_argument("friend")

    hobby = subparsers.add_parser("add-hobby", help="Add a hobby to a user")
    hobby.add_argument("login")
    hobby.add_argument("hobby")

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        repo = UserRepository(Database.open())
    except RepositoryError as e:
        console.print(f"[red]{e}[/]")
        return 1

    try:
        COMMANDS[args.command](repo, args)
    except RepositoryError as e:
        console.print(f"[red]{e}[/]")
        return 1
    finally:
        repo.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
