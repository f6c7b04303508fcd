"""
Sanitization stages, one per category of sensitive data.
"""

from .base import Stage, StageContext, StageResult
from .transients import TransientsStage
from .comments import CommentsStage
from .users import UsersStage
from .gravityforms import GravityFormsStage
from .woocommerce import WooCommerceStage
