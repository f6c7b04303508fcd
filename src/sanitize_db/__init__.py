"""
WordPress database sanitizer.

Import order matters! Follow dependency chain:
1. Base classes (no dependencies)
2. Core models (users, options)
3. Content models (comments, posts)
"""

# 1. Base classes first
from .base import Base, MetaMixin

# 2. Core models
from .core.users import User, UserMeta
from .core.options import Option, SiteMeta

# 3. Content
from .content.comments import Comment
from .content.posts import PostMeta

__version__ = '0.3.0'
