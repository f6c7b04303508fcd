"""Accounts stage: sanitize users and their attributes."""

import time

from ..core.users import User
from ..exceptions import RowWriteFailure
from ..fields import ACCOUNT_META_FIELDS, CONTACT_METHOD_FIELDS
from ..mutator import USER_META
from ..providers import SyntheticKind
from .base import Stage, StageResult


class UsersStage(Stage):
    """
    Replace identifying fields of every account.

    Accounts at a preserved email domain (the operating team's own) are left
    untouched. Core columns are written directly: going through the
    application's user API is too slow, and changing an email or password
    there notifies the account holder.

    Anonymizes:
        - user_login, user_nicename, display_name, user_email, user_pass
        - user_url (only where one was set)
        - first_name, last_name, nickname, description attributes

    Deletes:
        - social/IM contact-method attributes, for every account
    """

    name = 'users'
    title = 'user data'

    def __init__(self, ctx):
        super().__init__(ctx)
        self.preserve_email_domains = list(self.config.preserve_email_domains)

    def _sanitize_account(self, user):
        fake = self.provider

        username = fake.generate_different(SyntheticKind.USERNAME, user.user_login)

        current = self.accessor.get_account_meta(user.ID, ACCOUNT_META_FIELDS)
        meta = {key: fake.generate_different(kind, current.get(key))
                for key, kind in ACCOUNT_META_FIELDS.items()}
        for key, value in meta.items():
            self.accessor.update_account_meta(user.ID, key, value)

        fields = {
            'user_pass': fake.password_hash(),
            'user_login': username,
            'user_email': fake.generate_different(SyntheticKind.EMAIL, user.user_email),
            'user_nicename': username,
            'display_name': f"{meta['first_name']} {meta['last_name']}",
        }
        if user.user_url:
            fields['user_url'] = fake.generate_different(SyntheticKind.URL, user.user_url)
        self.accessor.update_account(user.ID, fields)

    def execute(self, result: StageResult) -> None:
        if self.preserve_email_domains:
            self.logger.info(f"  Preserving accounts at: {', '.join(self.preserve_email_domains)}")

        self.logger.info(f"  {self.accessor.count_accounts():,} accounts")
        interval = self.config.progress_interval
        start = time.monotonic()
        for count, user in enumerate(self.accessor.iter_accounts(self.config.batch_size), 1):
            if count % interval == 0:
                now = time.monotonic()
                self.logger.info(f"Processed {count:,} users in {now - start:.1f} seconds")
                start = now
                self.accessor.commit()

            if self.preserve_email_domains and user.has_email_domain(*self.preserve_email_domains):
                result.add('preserved')
                continue

            try:
                with self.accessor.atomic(User.__tablename__, user.ID):
                    self._sanitize_account(user)
                result.add('users')
            except RowWriteFailure as e:
                self.logger.error(str(e))
                result.failures += 1

        self.accessor.commit()

        for key in CONTACT_METHOD_FIELDS:
            self.logger.info(f"  Deleting {key}")
            deleted = self.apply_field(USER_META, key, CONTACT_METHOD_FIELDS.kind_for(key))
            result.add('contact_methods_deleted', deleted)
