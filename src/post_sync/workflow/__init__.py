"""
Workflow Module

Screen controllers that drive the post client: list, detail, create and
edit, wired to a navigator and an alerter.
"""

from .navigation import Alert, Alerter, Navigator
from .screens import PostDetailController, PostListController
from .forms import CreatePostForm, EditPostForm

__all__ = [
    "Alert",
    "Alerter",
    "Navigator",
    "PostListController",
    "PostDetailController",
    "CreatePostForm",
    "EditPostForm",
]
