#-------------------------------------------------------------------------bh-
# Common Imports:
from ..base import *
#-------------------------------------------------------------------------eh-


#-------------------------------------------------------------------------bm-
#----------------------------------------------------------------------------
class User(Base):
    """Represents an account (wp_users)."""
    __tablename__ = 'wp_users'

    __table_args__ = (
        Index('user_login_key', 'user_login'),
        Index('user_nicename', 'user_nicename'),
        Index('user_email', 'user_email'),
    )

    def __eq__(self, other):
        """Two users are equal if they have the same ID."""
        if not isinstance(other, User):
            return False
        return self.ID is not None and self.ID == other.ID

    def __hash__(self):
        return hash(self.ID) if self.ID is not None else hash(id(self))

    ID = Column(BigInteger().with_variant(Integer, 'sqlite'), primary_key=True, autoincrement=True)
    user_login = Column(String(60), nullable=False, default='')
    user_pass = Column(String(255), nullable=False, default='')
    user_nicename = Column(String(50), nullable=False, default='')
    user_email = Column(String(100), nullable=False, default='')
    user_url = Column(String(100), nullable=False, default='')
    user_registered = Column(DateTime, nullable=False, default=datetime.now)
    user_activation_key = Column(String(255), nullable=False, default='')
    user_status = Column(Integer, nullable=False, default=0)
    display_name = Column(String(250), nullable=False, default='')

    def email_domain(self) -> str:
        """Lower-cased domain part of the account's email ('' if none)."""
        if not self.user_email or '@' not in self.user_email:
            return ''
        return self.user_email.rsplit('@', 1)[1].lower()

    def has_email_domain(self, *domains: str) -> bool:
        """True if the account's email belongs to any of the given domains."""
        own = self.email_domain()
        return bool(own) and own in {d.lower().lstrip('@') for d in domains}

    def __repr__(self):
        return f"<User(ID={self.ID}, user_login='{self.user_login}')>"


#----------------------------------------------------------------------------
class UserMeta(Base, MetaMixin):
    """Arbitrary key/value attributes attached to an account (wp_usermeta)."""
    __tablename__ = 'wp_usermeta'

    __table_args__ = (
        Index('usermeta_user_id', 'user_id'),
        Index('usermeta_meta_key', 'meta_key'),
    )

    umeta_id = Column(BigInteger().with_variant(Integer, 'sqlite'), primary_key=True, autoincrement=True)
    user_id = Column(BigInteger, nullable=False, default=0)

    def __repr__(self):
        return f"<UserMeta(user_id={self.user_id}, meta_key='{self.meta_key}')>"
#-------------------------------------------------------------------------em-
