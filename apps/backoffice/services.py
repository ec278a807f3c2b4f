import logging
import math
import time

from django.contrib.auth.hashers import make_password
from django.db.models import Avg, Count, Q

from apps.accounts.mock_store import MockUserStore
from apps.support.models import CustomerFeedback
from .serializers import account_status

logger = logging.getLogger(__name__)


def mock_page(users, page, limit):
    total = len(users)
    offset = (page - 1) * limit
    return users[offset:offset + limit], {
        'page': page,
        'limit': limit,
        'total': total,
        'pages': math.ceil(total / limit),
    }


class MockDirectory:
    """Read side of the mock user store, shaped like the admin user listings"""

    def __init__(self, store=None):
        self.store = store or MockUserStore()

    @staticmethod
    def display_name(user):
        name = f"{user.get('first_name') or ''} {user.get('last_name') or ''}".strip()
        return name or 'Unknown User'

    def users(self, role=None):
        return [
            {
                'id': user['id'],
                'name': self.display_name(user),
                'email': user['email'],
                'role': user['role'],
                'phone': user.get('phone'),
                'status': account_status(user.get('is_active', True)),
                'is_verified': user.get('is_verified', True),
                'company_name': user.get('company_name'),
                'seller_approved': user.get('seller_approved'),
                'created_at': user.get('created_at'),
            }
            for user in self.store.all()
            if not role or user['role'] == role
        ]

    def sellers(self):
        return [
            {
                'id': user['id'],
                'name': user['name'],
                'email': user['email'],
                'role': user['role'],
                'phone': user['phone'],
                'status': user['status'],
                'company_name': user['company_name'] or 'N/A',
                'is_approved': bool(user['seller_approved']),
                'is_verified': user['is_verified'],
                'created_at': user['created_at'],
            }
            for user in self.users(role='seller')
        ]

    def create_seller(self, email, password, name, store_name, phone=None):
        first_name, _, rest = name.strip().partition(' ')
        user = self.store.upsert({
            'id': f"mock-seller-{int(time.time() * 1000)}",
            'email': email,
            'role': 'seller',
            'first_name': first_name,
            'last_name': rest.strip() or 'Seller',
            'phone': phone or None,
            'is_verified': True,
            'is_active': True,
            'company_name': store_name,
            'seller_approved': True,
            'password_hash': make_password(password),
        })
        logger.info("Mock seller %s stored", email)
        return self.store.public_data(user)


def feedback_stats():
    counts = CustomerFeedback.objects.aggregate(
        total=Count('id'),
        new=Count('id', filter=Q(status='new')),
        under_review=Count('id', filter=Q(status='reviewed')),
        responded=Count('id', filter=Q(status='responded')),
        closed=Count('id', filter=Q(status='closed')),
        avg_rating=Avg('rating'),
    )
    counts['avg_rating'] = round(counts['avg_rating'] or 0, 1)
    counts['by_type'] = {
        feedback_type: 0 for feedback_type, _ in CustomerFeedback.TYPE_CHOICES
    }
    for row in CustomerFeedback.objects.values('feedback_type').annotate(count=Count('id')):
        counts['by_type'][row['feedback_type']] = row['count']
    return counts
