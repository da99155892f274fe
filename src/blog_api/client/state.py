"""
Client-side application state
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

POST_FORM_FIELDS = ("title", "content", "authorId", "category", "tags")


@dataclass(eq=False)
class Notification:
    """Transient message shown to the user"""
    message: str
    level: str = "info"  # info | success | error


@dataclass
class ClientState:
    """Everything the controller remembers between user actions"""
    posts: List[Dict[str, Any]] = field(default_factory=list)
    visible_posts: List[Dict[str, Any]] = field(default_factory=list)
    categories: List[str] = field(default_factory=list)
    edit_target: Optional[int] = None
    search: str = ""
    category: str = ""
    overlay_post: Optional[Dict[str, Any]] = None
    notifications: List[Notification] = field(default_factory=list)

    @property
    def is_editing(self) -> bool:
        return self.edit_target is not None

    def find_post(self, post_id: Any) -> Optional[Dict[str, Any]]:
        """Cached post by id; ids read back from rendered markup arrive as strings"""
        try:
            post_id = int(post_id)
        except (TypeError, ValueError):
            return None
        for post in self.posts + self.visible_posts:
            if post["id"] == post_id:
                return post
        return None


def empty_form() -> Dict[str, str]:
    return {name: "" for name in POST_FORM_FIELDS}


def form_from_post(post: Dict[str, Any]) -> Dict[str, str]:
    return {name: post.get(name) or "" for name in POST_FORM_FIELDS}
