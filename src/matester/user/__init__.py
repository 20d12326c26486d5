"""
User

This module provides classes for managing user accounts, credentials,
hobbies and friendships.
"""

from matester.user.models import Credential, User, UserProfile
from matester.user.repository import UserRepository

__all__ = ["Credential", "User", "UserProfile", "UserRepository"]
