#-------------------------------------------------------------------------bh-
# Common Imports:
from ..base import *
#-------------------------------------------------------------------------eh-


#-------------------------------------------------------------------------bm-
#----------------------------------------------------------------------------
class Comment(Base):
    """Represents a comment (wp_comments)."""
    __tablename__ = 'wp_comments'

    # comment_approved values
    APPROVED = '1'
    HOLD = '0'
    SPAM = 'spam'
    TRASH = 'trash'

    __table_args__ = (
        Index('comment_post_ID', 'comment_post_ID'),
        Index('comment_approved_date_gmt', 'comment_approved', 'comment_date_gmt'),
        Index('comment_author_email', 'comment_author_email'),
    )

    comment_ID = Column(BigInteger().with_variant(Integer, 'sqlite'), primary_key=True, autoincrement=True)
    comment_post_ID = Column(BigInteger, nullable=False, default=0)
    comment_author = Column(Text, nullable=False, default='')
    comment_author_email = Column(String(100), nullable=False, default='')
    comment_author_url = Column(String(200), nullable=False, default='')
    comment_author_IP = Column(String(100), nullable=False, default='')
    comment_date = Column(DateTime, nullable=False, default=datetime.now)
    comment_date_gmt = Column(DateTime, nullable=False, default=datetime.now)
    comment_content = Column(Text, nullable=False, default='')
    comment_karma = Column(Integer, nullable=False, default=0)
    comment_approved = Column(String(20), nullable=False, default='1')
    comment_agent = Column(String(255), nullable=False, default='')
    comment_type = Column(String(20), nullable=False, default='comment')
    comment_parent = Column(BigInteger, nullable=False, default=0)
    user_id = Column(BigInteger, nullable=False, default=0)

    def __repr__(self):
        return f"<Comment(comment_ID={self.comment_ID}, comment_approved='{self.comment_approved}')>"
#-------------------------------------------------------------------------em-
