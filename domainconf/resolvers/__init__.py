"""Domain-aware settings resolvers."""

from domainconf.resolvers.database import DatabaseConnectionResolver
from domainconf.resolvers.domain import DomainConfigResolver
from domainconf.resolvers.logging import LoggingConfigResolver
from domainconf.resolvers.settings import (
    EmailConfigResolver,
    JwtConfigResolver,
    PasswordPolicyResolver,
    PasswordResetConfigResolver,
    SmsConfigResolver,
)

__all__ = [
    "DatabaseConnectionResolver",
    "DomainConfigResolver",
    "EmailConfigResolver",
    "JwtConfigResolver",
    "LoggingConfigResolver",
    "PasswordPolicyResolver",
    "PasswordResetConfigResolver",
    "SmsConfigResolver",
]
