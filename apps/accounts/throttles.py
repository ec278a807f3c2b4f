from rest_framework.throttling import AnonRateThrottle


class AuthRateThrottle(AnonRateThrottle):
    """Tighter per-IP limit for credential and code endpoints"""
    scope = 'auth'
