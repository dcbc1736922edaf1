"""
Token Service
Issues and verifies the signed bearer tokens used by the API
"""
from datetime import datetime, timezone

import jwt
from flask import current_app


class TokenService:
    """Stateless JWT helpers, configured from app.config"""

    @staticmethod
    def issue(user):
        """Return a signed token for *user*, valid for JWT_EXPIRES."""
        now = datetime.now(timezone.utc)
        payload = {
            'user_id': user.id,
            'email': user.email,
            'iat': now,
            'exp': now + current_app.config['JWT_EXPIRES'],
        }
        return jwt.encode(
            payload,
            current_app.config['JWT_SECRET'],
            algorithm=current_app.config['JWT_ALGORITHM'],
        )

    @staticmethod
    def decode(token):
        """
        Verify *token* and return its payload.

        Raises jwt.InvalidTokenError (including ExpiredSignatureError) when the
        signature, expiry or payload is not acceptable.
        """
        payload = jwt.decode(
            token,
            current_app.config['JWT_SECRET'],
            algorithms=[current_app.config['JWT_ALGORITHM']],
            options={'require': ['exp', 'iat']},
        )
        if not isinstance(payload.get('user_id'), int):
            raise jwt.InvalidTokenError('Token has no user id')
        return payload

    @staticmethod
    def token_from_header(header_value):
        """Extract the token from an ``Authorization: Bearer <token>`` value."""
        if not header_value:
            return None
        scheme, _, token = header_value.partition(' ')
        if scheme.lower() != 'bearer' or not token.strip():
            return None
        return token.strip()
