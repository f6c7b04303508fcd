#-------------------------------------------------------------------------bh-
# Common Imports:
from ..base import *
#-------------------------------------------------------------------------eh-


#-------------------------------------------------------------------------bm-
#----------------------------------------------------------------------------
class PostMeta(Base, MetaMixin):
    """Key/value attributes attached to posts, pages and shop orders (wp_postmeta)."""
    __tablename__ = 'wp_postmeta'

    __table_args__ = (
        Index('postmeta_post_id', 'post_id'),
        Index('postmeta_meta_key', 'meta_key'),
    )

    meta_id = Column(BigInteger().with_variant(Integer, 'sqlite'), primary_key=True, autoincrement=True)
    post_id = Column(BigInteger, nullable=False, default=0)

    def __repr__(self):
        return f"<PostMeta(post_id={self.post_id}, meta_key='{self.meta_key}')>"
#-------------------------------------------------------------------------em-
