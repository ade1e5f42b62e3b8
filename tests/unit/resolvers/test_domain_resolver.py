"""Tests for DomainConfigResolver and the typed resolvers."""

from datetime import timedelta

import pytest
from pydantic import BaseModel

from domainconf.caching.cache import InMemoryConfigCache
from domainconf.models.email import EmailSettings
from domainconf.models.jwt import JwtSettings
from domainconf.models.password import PasswordPolicySettings, PasswordResetSettings
from domainconf.models.sms import SmsSettings
from domainconf.resolvers.domain import DomainConfigResolver
from domainconf.resolvers.settings import (
    EmailConfigResolver,
    JwtConfigResolver,
    PasswordPolicyResolver,
    PasswordResetConfigResolver,
    SmsConfigResolver,
)
from domainconf.source.base import ConfigurationSection
from domainconf.source.binding import bind_section
from domainconf.source.memory import InMemoryConfigurationSource


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def make_settings_type(default: str) -> type[BaseModel]:
    """A fresh settings class named Settings on every call."""

    class Settings(BaseModel):
        value: str = default

    return Settings


class CountingBinder:
    """Binder that records every section it binds."""

    def __init__(self) -> None:
        self.paths: list[str] = []

    def __call__(self, section: ConfigurationSection, model_type: type) -> object:
        self.paths.append(section.path)
        return bind_section(section, model_type)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> InMemoryConfigCache[EmailSettings]:
    return InMemoryConfigCache(default_ttl=timedelta(seconds=60), clock=clock)


@pytest.fixture
def binder() -> CountingBinder:
    return CountingBinder()


@pytest.fixture
def resolver(
    source: InMemoryConfigurationSource,
    cache: InMemoryConfigCache[EmailSettings],
    binder: CountingBinder,
) -> EmailConfigResolver:
    return EmailConfigResolver(source, cache=cache, binder=binder)


class TestConstruction:
    """Tests for constructor argument checks."""

    def test_requires_source(self) -> None:
        """A missing source is rejected."""
        with pytest.raises(ValueError):
            DomainConfigResolver(None, EmailSettings, "EmailSettings", "DomainEmailSettings")  # type: ignore[arg-type]

    def test_requires_section_names(self, source: InMemoryConfigurationSource) -> None:
        """Empty section names are rejected."""
        with pytest.raises(ValueError):
            DomainConfigResolver(source, EmailSettings, "", "DomainEmailSettings")
        with pytest.raises(ValueError):
            DomainConfigResolver(source, EmailSettings, "EmailSettings", "")

    @pytest.mark.parametrize(
        ("resolver_type", "settings_type", "global_section", "domain_section"),
        [
            (EmailConfigResolver, EmailSettings, "EmailSettings", "DomainEmailSettings"),
            (SmsConfigResolver, SmsSettings, "SmsSettings", "DomainSmsSettings"),
            (JwtConfigResolver, JwtSettings, "JwtSettings", "DomainJwtSettings"),
            (
                PasswordPolicyResolver,
                PasswordPolicySettings,
                "PasswordPolicy",
                "DomainPasswordPolicy",
            ),
            (
                PasswordResetConfigResolver,
                PasswordResetSettings,
                "PasswordResetSettings",
                "DomainPasswordResetSettings",
            ),
        ],
    )
    def test_typed_resolver_sections(
        self,
        source: InMemoryConfigurationSource,
        resolver_type: type,
        settings_type: type,
        global_section: str,
        domain_section: str,
    ) -> None:
        """Each typed resolver reads its own sections."""
        resolver = resolver_type(source)
        assert resolver.settings_type is settings_type
        assert resolver.global_section == global_section
        assert resolver.domain_section == domain_section


class TestGetSettings:
    """Tests for resolution with fallback."""

    def test_domain_settings_take_precedence(self, resolver: EmailConfigResolver) -> None:
        """A configured domain gets its own section."""
        settings = resolver.get_settings("acme")
        assert settings.smtp_server == "smtp.acme.test"
        assert settings.smtp_port == 2525

    def test_domain_section_is_not_merged_with_global(
        self, resolver: EmailConfigResolver
    ) -> None:
        """Fields missing from the domain section take model defaults."""
        assert resolver.get_settings("acme").sender_name == ""

    def test_unknown_domain_falls_back_to_global(self, resolver: EmailConfigResolver) -> None:
        """An unconfigured domain gets the global settings."""
        settings = resolver.get_settings("unknown")
        assert settings == resolver.get_global_settings()
        assert settings.smtp_server == "smtp.global.test"

    def test_empty_domain_section_binds_defaults(self, resolver: EmailConfigResolver) -> None:
        """A present but empty domain section is not a fallback."""
        assert resolver.get_settings("empty") == EmailSettings()

    def test_missing_global_section_yields_defaults(self) -> None:
        """With nothing configured the result is the model defaults."""
        resolver = SmsConfigResolver(InMemoryConfigurationSource())
        assert resolver.get_settings("acme") == SmsSettings()

    def test_domains_are_case_sensitive(self, resolver: EmailConfigResolver) -> None:
        """Domain lookup does not fold case."""
        assert resolver.get_settings("ACME").smtp_server == "smtp.global.test"

    def test_empty_domain_returns_global_without_domain_entry(
        self,
        resolver: EmailConfigResolver,
        cache: InMemoryConfigCache[EmailSettings],
    ) -> None:
        """An empty domain returns the global settings and caches only the global entry."""
        settings = resolver.get_settings("")
        assert settings.smtp_server == "smtp.global.test"
        assert cache.keys() == [(EmailSettings, None)]

    def test_null_domain_section_falls_back_to_global(self) -> None:
        """A domain key holding null is unconfigured."""
        source = InMemoryConfigurationSource(
            {
                "EmailSettings": {"SmtpServer": "smtp.global.test"},
                "DomainEmailSettings": {"acme": None},
            }
        )
        resolver = EmailConfigResolver(source)

        assert resolver.get_domain_settings("acme") is None
        assert resolver.get_settings("acme").smtp_server == "smtp.global.test"
        assert resolver.get_configured_domains() == []

    def test_domain_with_separator_falls_back_to_global(
        self, resolver: EmailConfigResolver
    ) -> None:
        """A domain containing ':' never reads a nested node."""
        assert resolver.get_domain_settings("acme:SmtpServer") is None
        assert resolver.get_settings("acme:SmtpServer").smtp_server == "smtp.global.test"

    def test_works_without_cache(self, source: InMemoryConfigurationSource) -> None:
        """A resolver without a cache binds on every call."""
        resolver = JwtConfigResolver(source)
        assert resolver.get_settings("acme").issuer == "acme"
        assert resolver.get_settings("other").issuer == "AuthenticationApi"


class TestCaching:
    """Tests for cache use and expiry."""

    def test_second_read_is_served_from_cache(
        self, resolver: EmailConfigResolver, binder: CountingBinder
    ) -> None:
        """A cached domain is not rebound."""
        first = resolver.get_settings("acme")
        second = resolver.get_settings("acme")
        assert first is second
        assert binder.paths == ["DomainEmailSettings:acme"]

    def test_source_change_invisible_until_expiry(
        self,
        resolver: EmailConfigResolver,
        source: InMemoryConfigurationSource,
        clock: FakeClock,
    ) -> None:
        """Changes show up once the entry expires."""
        resolver.get_settings("acme")
        source.set_value("DomainEmailSettings:acme:SmtpServer", "smtp.new.test")

        clock.now = 59
        assert resolver.get_settings("acme").smtp_server == "smtp.acme.test"

        clock.now = 60
        assert resolver.get_settings("acme").smtp_server == "smtp.new.test"

    def test_fallback_value_cached_under_domain_key(
        self,
        resolver: EmailConfigResolver,
        source: InMemoryConfigurationSource,
        cache: InMemoryConfigCache[EmailSettings],
    ) -> None:
        """A domain that fell back keeps the global value it saw."""
        resolver.get_settings("other")
        assert (EmailSettings, "other") in cache.keys()

        source.set_value("EmailSettings:SmtpServer", "smtp.changed.test")
        cache.remove((EmailSettings, None))

        assert resolver.get_global_settings().smtp_server == "smtp.changed.test"
        assert resolver.get_settings("other").smtp_server == "smtp.global.test"

    def test_types_do_not_collide_in_shared_cache(
        self, source: InMemoryConfigurationSource
    ) -> None:
        """Two resolvers can share one cache."""
        shared: InMemoryConfigCache = InMemoryConfigCache()
        email = EmailConfigResolver(source, cache=shared)
        jwt = JwtConfigResolver(source, cache=shared)

        assert isinstance(email.get_settings("acme"), EmailSettings)
        assert isinstance(jwt.get_settings("acme"), JwtSettings)
        assert isinstance(email.get_settings("acme"), EmailSettings)

    def test_same_named_types_do_not_collide(self) -> None:
        """Cache keys use the settings class, not its name."""
        first_type = make_settings_type("first")
        second_type = make_settings_type("second")
        source = InMemoryConfigurationSource(
            {"First": {"Value": "A"}, "Second": {"Value": "B"}}
        )
        shared: InMemoryConfigCache = InMemoryConfigCache()
        first = DomainConfigResolver(source, first_type, "First", "DomainFirst", cache=shared)
        second = DomainConfigResolver(source, second_type, "Second", "DomainSecond", cache=shared)

        assert first.get_settings("x").value == "A"
        got = second.get_settings("x")
        assert type(got) is second_type
        assert got.value == "B"

        first.refresh()
        assert shared.keys() == [(second_type, None), (second_type, "x")]


class TestRefresh:
    """Tests for refresh scoping."""

    def test_refresh_domain_drops_only_that_domain(
        self, resolver: EmailConfigResolver, binder: CountingBinder
    ) -> None:
        """refresh(domain) rebinds that domain only."""
        resolver.get_settings("acme")
        resolver.get_settings("empty")
        binder.paths.clear()

        resolver.refresh("acme")
        resolver.get_settings("acme")
        resolver.get_settings("empty")

        assert binder.paths == ["DomainEmailSettings:acme"]

    def test_refresh_all_drops_domain_and_global(
        self, resolver: EmailConfigResolver, binder: CountingBinder
    ) -> None:
        """refresh() rebinds every domain and the global section."""
        resolver.get_settings("acme")
        resolver.get_settings("other")
        binder.paths.clear()

        resolver.refresh()
        resolver.get_settings("acme")
        resolver.get_settings("other")

        assert binder.paths == [
            "DomainEmailSettings:acme",
            "EmailSettings",
        ]

    def test_refresh_all_keeps_other_namespaces(
        self, source: InMemoryConfigurationSource
    ) -> None:
        """refresh() on one resolver leaves a shared cache's other entries."""
        shared: InMemoryConfigCache = InMemoryConfigCache()
        email = EmailConfigResolver(source, cache=shared)
        jwt = JwtConfigResolver(source, cache=shared)
        email.get_settings("acme")
        jwt.get_settings("acme")

        email.refresh()

        assert shared.keys() == [(JwtSettings, "acme")]

    def test_refresh_without_cache_is_noop(self, source: InMemoryConfigurationSource) -> None:
        """Refreshing an uncached resolver does nothing."""
        EmailConfigResolver(source).refresh()


class TestConfiguredDomains:
    """Tests for get_configured_domains and get_domain_settings."""

    def test_lists_domain_sections(self, resolver: EmailConfigResolver) -> None:
        """Child keys under the domain prefix are listed."""
        assert resolver.get_configured_domains() == ["acme", "empty"]

    def test_no_domain_sections(self, source: InMemoryConfigurationSource) -> None:
        """A missing prefix lists nothing."""
        assert SmsConfigResolver(source).get_configured_domains() == []

    def test_get_domain_settings_none_when_missing(self, resolver: EmailConfigResolver) -> None:
        """Only the domain section is consulted."""
        assert resolver.get_domain_settings("other") is None
        assert resolver.get_domain_settings("") is None
