from typing import List

from psycopg import Cursor

from matester.db import Database
from matester.errors import NotFound, RepositoryError
from matester.logger import get_logger
from matester.user.models import Credential, User, UserProfile

logger = get_logger(__name__)


class UserRepository:
    """
    Repository for user-related data access.
    Encapsulates all SQL and queries for the users, auth, hobbies,
    user2hobbies and friends tables.
    """

    def __init__(self, database: Database):
        self.db = database

    # Identity resolution

    def get_user_id(self, login: str) -> int:
        """Get the surrogate id of a user by login."""
        with self.db.transaction() as cur:
            return self._user_id(cur, login)

    def get_hobby_id(self, name: str) -> int:
        """Get the id of a hobby by name."""
        row = self.db.fetch_one("SELECT id FROM hobbies WHERE name = %s", (name,))
        if row is None:
            raise NotFound("hobby", name)
        return row["id"]

    # Authentication

    def authorised_user(self, login: str) -> Credential:
        """
        Look up the token issued to a user.
        Raises NotFound if the user or its credential row is missing.
        """
        with self.db.transaction() as cur:
            user_id = self._user_id(cur, login)
            cur.execute("SELECT token FROM auth WHERE user_id = %s", (user_id,))
            row = cur.fetchone()
        if row is None:
            raise NotFound("credential", login)
        return Credential(login=login, token=row["token"])

    # User creation

    def create_user(self, user: User, token: str) -> User:
        """
        Create a user together with its credential row.

        The profile insert, id resolution and credential insert run in one
        transaction: if any step fails nothing is stored.

        Returns:
            The stored user, with its generated id.
        """
        try:
            with self.db.transaction() as cur:
                cur.execute(
                    """
                    INSERT INTO users (login, first_name, last_name, birth_date, gender, city)
                    VALUES (%s, %s, %s, %s, %s, %s)
                    RETURNING *
                    """,
                    (user.login, user.first_name, user.last_name, user.birth_date, user.gender, user.city),
                )
                created = User.from_row(cur.fetchone())
                cur.execute(
                    "INSERT INTO auth (user_id, token) VALUES (%s, %s)",
                    (created.id, token),
                )
        except RepositoryError as e:
            logger.error(f"Failed to create user {user.login}: {e}")
            raise
        logger.info(f"Created user {created.login} (id={created.id})")
        return created

    # Profile & listing

    def get_user(self, login: str) -> User:
        """Get a user by login."""
        with self.db.transaction() as cur:
            return self._user(cur, login)

    def get_user_profile(self, login: str) -> UserProfile:
        """Get a user along with the names of their hobbies."""
        with self.db.transaction() as cur:
            user_id = self._user_id(cur, login)
            user = self._user(cur, login)
            hobbies = self._hobbies(cur, user_id)
        return UserProfile(user=user, hobbies=hobbies)

    def list_hobbies(self, user_id: int) -> List[str]:
        """List the hobby names linked to a user, alphabetically."""
        with self.db.transaction() as cur:
            return self._hobbies(cur, user_id)

    def list_users(self) -> List[User]:
        """List all users."""
        rows = self.db.fetch_all("SELECT * FROM users ORDER BY user_id")
        return [User.from_row(r) for r in rows]

    def list_friends(self, user_id: int) -> List[User]:
        """
        List the friends of a user.
        A friendship stored in either direction counts, each friend appears once.
        """
        rows = self.db.fetch_all(
            """
            SELECT u.*
            FROM users u
            JOIN (
                SELECT fst AS friend_id FROM friends WHERE snd = %s
                UNION
                SELECT snd AS friend_id FROM friends WHERE fst = %s
            ) fr ON u.user_id = fr.friend_id
            ORDER BY u.user_id
            """,
            (user_id, user_id),
        )
        return [User.from_row(r) for r in rows]

    # Linking

    def add_hobby(self, user_id: int, hobby: str) -> None:
        """
        Link a hobby to a user, creating the hobby on first use.
        Linking the same hobby twice stores two link rows but one hobby.
        """
        try:
            with self.db.transaction() as cur:
                hobby_id = self._hobby_id(cur, hobby)
                if hobby_id is None:
                    cur.execute(
                        "INSERT INTO hobbies (name) VALUES (%s) ON CONFLICT (name) DO NOTHING",
                        (hobby,),
                    )
                    created = cur.rowcount == 1
                    hobby_id = self._hobby_id(cur, hobby)
                    if created:
                        logger.info(f"Created hobby {hobby!r} (id={hobby_id})")
                cur.execute(
                    "INSERT INTO user2hobbies (user_id, hobby_id) VALUES (%s, %s)",
                    (user_id, hobby_id),
                )
        except RepositoryError as e:
            logger.error(f"Failed to add hobby {hobby!r} to user {user_id}: {e}")
            raise

    def add_friend(self, user_id: int, friend_id: int) -> None:
        """Store a directed friendship (user_id, friend_id). No mirror row is added."""
        try:
            self.db.execute(
                "INSERT INTO friends (fst, snd) VALUES (%s, %s)",
                (user_id, friend_id),
            )
        except RepositoryError as e:
            logger.error(f"Failed to add friend {friend_id} to user {user_id}: {e}")
            raise

    def close(self) -> None:
        """Release the underlying connection pool."""
        self.db.close()

    # Statement helpers, run on a caller-owned cursor

    def _user_id(self, cur: Cursor, login: str) -> int:
        cur.execute("SELECT user_id FROM users WHERE login = %s", (login,))
        row = cur.fetchone()
        if row is None:
            raise NotFound("user", login)
        return row["user_id"]

    def _hobby_id(self, cur: Cursor, name: str) -> int | None:
        cur.execute("SELECT id FROM hobbies WHERE name = %s", (name,))
        row = cur.fetchone()
        return row["id"] if row else None

    def _user(self, cur: Cursor, login: str) -> User:
        cur.execute("SELECT * FROM users WHERE login = %s LIMIT 1", (login,))
        row = cur.fetchone()
        if row is None:
            raise NotFound("user", login)
        return User.from_row(row)

    def _hobbies(self, cur: Cursor, user_id: int) -> List[str]:
        cur.execute(
            """
            SELECT h.name
            FROM user2hobbies uh
            JOIN hobbies h ON h.id = uh.hobby_id
            WHERE uh.user_id = %s
            ORDER BY h.name
            """,
            (user_id,),
        )
        return [r["name"] for r in cur.fetchall()]
