"""Seed demo users, hobbies and friendships into the database."""
from datetime import date

from matester.db import Database
from matester.errors import NotFound
from matester.user import User, UserRepository

INITIAL_USERS = [
    {"user": User(login="alice", first_name="Alice", last_name="Liddell", birth_date=date(1990, 5, 4), gender="female", city="Oxford"), "token": "tok1"},
    {"user": User(login="bob", first_name="Bob", last_name="Builder", birth_date=date(1985, 11, 23), gender="male", city="London"), "token": "tok2"},
]

INITIAL_HOBBIES = {"alice": ["chess", "archery"], "bob": ["chess"]}
INITIAL_FRIENDS = [("alice", "bob")]


def main():
    users_repo = UserRepository(Database.open())

    try:
        for entry in INITIAL_USERS:
            login = entry["user"].login
            try:
                users_repo.get_user_id(login)
                print(f"Skipping {login} - already exists")
                continue
            except NotFound:
                pass

            result = users_repo.create_user(entry["user"], entry["token"])
            print(f"Created: {result.login} (id={result.id})")

            for hobby in INITIAL_HOBBIES.get(login, []):
                users_repo.add_hobby(result.id, hobby)

        for login, friend in INITIAL_FRIENDS:
            user_id = users_repo.get_user_id(login)
            friend_id = users_repo.get_user_id(friend)
            if any(u.id == friend_id for u in users_repo.list_friends(user_id)):
                continue
            users_repo.add_friend(user_id, friend_id)
            print(f"Linked: {login} <-> {friend}")
    finally:
        users_repo.close()


if __name__ == "__main__":
    main()
