import json
import logging
import threading
import time
from pathlib import Path

from django.conf import settings
from django.contrib.auth.hashers import check_password, make_password

logger = logging.getLogger(__name__)

_lock = threading.Lock()


class MockUserStore:
    """
    JSON file of users that keeps login and the admin user list working
    while the database is unreachable. The file is seeded on first use.
    """

    def __init__(self, path=None):
        self.path = Path(path or settings.MOCK_USER_STORE_PATH)

    def _seed_users(self):
        now = int(time.time() * 1000)
        return [
            {
                'id': f'mock-admin-{now}',
                'email': 'amzify54@gmail.com',
                'role': 'admin',
                'first_name': 'Admin',
                'last_name': 'User',
                'phone': None,
                'is_verified': True,
                'is_active': True,
                'company_name': None,
                'seller_approved': False,
                'password_hash': make_password('admin123'),
            },
            {
                'id': f'mock-seller-{now + 1}',
                'email': 'seller@amzify.com',
                'role': 'seller',
                'first_name': 'Seller',
                'last_name': 'User',
                'phone': None,
                'is_verified': True,
                'is_active': True,
                'company_name': 'Mock Seller Co.',
                'seller_approved': True,
                'password_hash': make_password('seller123'),
            },
            {
                'id': f'mock-customer-{now + 2}',
                'email': 'customer@amzify.com',
                'role': 'customer',
                'first_name': 'Customer',
                'last_name': 'User',
                'phone': None,
                'is_verified': True,
                'is_active': True,
                'company_name': None,
                'seller_approved': False,
                'password_hash': make_password('customer123'),
            },
        ]

    def _ensure_file(self):
        if self.path.exists():
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._write(self._seed_users())
        logger.info("Seeded mock user store at %s", self.path)

    def _write(self, users):
        self.path.write_text(json.dumps(users, indent=2), encoding='utf-8')

    def all(self):
        with _lock:
            self._ensure_file()
            parsed = json.loads(self.path.read_text(encoding='utf-8') or '[]')
        return parsed if isinstance(parsed, list) else []

    def find_by_email(self, email):
        email = (email or '').lower()
        return next((u for u in self.all() if u['email'].lower() == email), None)

    def find_by_id(self, user_id):
        return next((u for u in self.all() if u['id'] == user_id), None)

    def upsert(self, user):
        """Insert or replace a user keyed by email. Returns the stored record."""
        with _lock:
            self._ensure_file()
            users = json.loads(self.path.read_text(encoding='utf-8') or '[]')
            email = user['email'].lower()
            for index, existing in enumerate(users):
                if existing['email'].lower() == email:
                    users[index] = {**existing, **user, 'id': existing['id']}
                    self._write(users)
                    return users[index]
            users.append(user)
            self._write(users)
        return user

    @staticmethod
    def check_password(user, raw_password):
        return bool(user.get('password_hash')) and check_password(raw_password, user['password_hash'])

    @staticmethod
    def public_data(user):
        role = user.get('role')
        return {
            'id': user['id'],
            'email': user['email'],
            'role': role,
            'first_name': user.get('first_name'),
            'last_name': user.get('last_name'),
            'phone': user.get('phone'),
            'is_verified': user.get('is_verified', True),
            'company_name': user.get('company_name') or ('Mock Seller Co.' if role == 'seller' else None),
            'seller_approved': bool(user.get('seller_approved')) if role == 'seller' else False,
        }
