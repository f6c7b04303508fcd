"""
Synthetic value provider.

Every kind of fake value the sanitizer can write is a member of
``SyntheticKind``; ``GENERATORS`` binds each kind to the Faker call that
produces it. ``SyntheticKind.DELETE`` has no generator: it tells the caller
to remove the attribute instead of replacing it.
"""

import hashlib
from enum import Enum
from typing import Callable, Optional

from faker import Faker


class SyntheticKind(Enum):
    NAME = 'name'
    FIRST_NAME = 'first_name'
    LAST_NAME = 'last_name'
    USERNAME = 'username'
    EMAIL = 'email'
    URL = 'url'
    DOMAIN = 'domain'
    WORD = 'word'
    TEXT = 'text'
    LONG_TEXT = 'long_text'
    PASSWORD = 'password'
    PHONE = 'phone'
    COMPANY = 'company'
    COUNTRY_CODE = 'country_code'
    STREET_ADDRESS = 'street_address'
    SECONDARY_ADDRESS = 'secondary_address'
    CITY = 'city'
    STATE_ABBR = 'state_abbr'
    POSTCODE = 'postcode'
    IPV4 = 'ipv4'
    NUMBER = 'number'
    DELETE = 'delete'


GENERATORS = {
    SyntheticKind.NAME: lambda fake: fake.name(),
    SyntheticKind.FIRST_NAME: lambda fake: fake.first_name(),
    SyntheticKind.LAST_NAME: lambda fake: fake.last_name(),
    SyntheticKind.USERNAME: lambda fake: fake.user_name(),
    # safe_email only uses example.{com,net,org}, which never deliver
    SyntheticKind.EMAIL: lambda fake: fake.safe_email(),
    SyntheticKind.URL: lambda fake: fake.url(),
    SyntheticKind.DOMAIN: lambda fake: fake.domain_name(),
    SyntheticKind.WORD: lambda fake: fake.domain_word(),
    SyntheticKind.TEXT: lambda fake: fake.text(max_nb_chars=200),
    SyntheticKind.LONG_TEXT: lambda fake: fake.text(max_nb_chars=400),
    SyntheticKind.PASSWORD: lambda fake: fake.password(),
    SyntheticKind.PHONE: lambda fake: fake.phone_number(),
    SyntheticKind.COMPANY: lambda fake: fake.company(),
    SyntheticKind.COUNTRY_CODE: lambda fake: fake.country_code(),
    SyntheticKind.STREET_ADDRESS: lambda fake: fake.street_address(),
    SyntheticKind.SECONDARY_ADDRESS: lambda fake: fake.secondary_address(),
    SyntheticKind.CITY: lambda fake: fake.city(),
    SyntheticKind.STATE_ABBR: lambda fake: fake.state_abbr(),
    SyntheticKind.POSTCODE: lambda fake: fake.postcode(),
    SyntheticKind.IPV4: lambda fake: fake.ipv4(),
    SyntheticKind.NUMBER: lambda fake: str(fake.random_number(digits=4, fix_len=True)),
}


class FakeValueProvider:
    """Produces plausible fake values of a requested kind."""

    def __init__(self, seed: Optional[int] = None, locale: str = 'en_US'):
        self.faker = Faker(locale)
        if seed is not None:
            self.faker.seed_instance(seed)

    def generate(self, kind: SyntheticKind) -> str:
        """Generate one value of the given kind."""
        try:
            generator = GENERATORS[kind]
        except KeyError:
            raise ValueError(f"No generator for {kind}") from None
        return generator(self.faker)

    def source(self, kind: SyntheticKind) -> Callable[[], str]:
        """Zero-argument callable producing a fresh value per call."""
        if kind not in GENERATORS:
            raise ValueError(f"No generator for {kind}")
        return lambda: self.generate(kind)

    def generate_different(self, kind: SyntheticKind, current: Optional[str], attempts: int = 10) -> str:
        """Generate a value of ``kind`` that is not equal to ``current``."""
        value = self.generate(kind)
        for _ in range(attempts):
            if value != current:
                return value
            value = self.generate(kind)
        # Faker pools are finite; fall back to a numbered suffix
        suffix = self.faker.random_number(digits=4, fix_len=True)
        if '@' in value:
            local, domain = value.split('@', 1)
            return f"{local}{suffix}@{domain}"
        return f"{value}{suffix}"

    def password_hash(self) -> str:
        """A generated password, stored as a legacy (MD5) WordPress hash."""
        password = self.generate(SyntheticKind.PASSWORD)
        return hashlib.md5(password.encode()).hexdigest()
