"""
Repositories package

Each repository encapsulates database operations for a model:
- account_repository.py
- tag_repository.py

Usage:
    from studyolle.repositories.account_repository import AccountRepository
    account = AccountRepository.find_by_nickname("gicheol")
"""
