#-------------------------------------------------------------------------bh-
# Common Imports:
from ..base import *
#-------------------------------------------------------------------------eh-


#-------------------------------------------------------------------------bm-
#----------------------------------------------------------------------------
class Option(Base):
    """Site-wide settings and transient cache entries (wp_options)."""
    __tablename__ = 'wp_options'

    option_id = Column(BigInteger().with_variant(Integer, 'sqlite'), primary_key=True, autoincrement=True)
    option_name = Column(String(191), nullable=False, unique=True, default='')
    option_value = Column(Text, nullable=False, default='')
    autoload = Column(String(20), nullable=False, default='yes')

    @classmethod
    def get_value(cls, session, name: str) -> Optional[str]:
        """Return the stored value of an option, or None if it is not set."""
        return session.query(cls.option_value).filter(cls.option_name == name).scalar()

    def __repr__(self):
        return f"<Option(option_name='{self.option_name}')>"


#----------------------------------------------------------------------------
class SiteMeta(Base, MetaMixin):
    """Network-wide settings of a multisite install (wp_sitemeta)."""
    __tablename__ = 'wp_sitemeta'

    meta_id = Column(BigInteger().with_variant(Integer, 'sqlite'), primary_key=True, autoincrement=True)
    site_id = Column(BigInteger, nullable=False, default=0)
#-------------------------------------------------------------------------em-
