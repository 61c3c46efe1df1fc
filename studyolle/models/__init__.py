"""
Models package

- account.py: Account and the account_tags association table
- tag.py: Tag
"""

from .tag import Tag
from .account import Account, account_tags

__all__ = [
    "Account",
    "Tag",
    "account_tags",
]
