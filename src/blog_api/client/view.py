"""
Views driven by the post controller

HtmlView renders page fragments with Jinja2 autoescaping, so every piece of
post-derived text is HTML-escaped before it reaches the page.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List

from jinja2 import DictLoader, Environment
from markupsafe import Markup, escape

from blog_api.client.state import Notification


class View(ABC):
    """Rendering surface the controller talks to"""

    @abstractmethod
    def render_posts(self, posts: List[Dict[str, Any]], has_any_posts: bool) -> None: ...

    @abstractmethod
    def render_categories(self, categories: List[str], selected: str) -> None: ...

    @abstractmethod
    def render_form(self, values: Dict[str, str], edit_mode: bool) -> None: ...

    @abstractmethod
    def show_overlay(self, post: Dict[str, Any]) -> None: ...

    @abstractmethod
    def hide_overlay(self) -> None: ...

    @abstractmethod
    def show_notification(self, notification: Notification) -> None: ...

    @abstractmethod
    def hide_notification(self, notification: Notification) -> None: ...

    @abstractmethod
    def confirm(self, message: str) -> bool: ...


def format_date(value: Any) -> str:
    if not value:
        return ""
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00")).strftime("%Y-%m-%d")
    except ValueError:
        return str(value)


def split_tags(value: Any) -> List[str]:
    return [tag.strip() for tag in (value or "").split(",") if tag.strip()]


def nl2br(value: Any) -> Markup:
    return Markup("<br>").join(escape(line) for line in str(value or "").split("\n"))


TEMPLATES = {
    "post_meta.html": (
        '<div class="post-meta">'
        '<strong>Author:</strong> {{ post.authorId }} | '
        '<strong>Category:</strong> {{ post.category }} | '
        '<strong>Created:</strong> {{ post.createdAt | format_date }} | '
        '<strong>Updated:</strong> {{ post.updatedAt | format_date }}'
        '</div>'
    ),
    "post_tags.html": (
        '{% set tags = post.tags | split_tags %}'
        '{% if tags %}<div class="post-tags">'
        '{% for tag in tags %}<span class="tag">{{ tag }}</span>{% endfor %}'
        '</div>{% endif %}'
    ),
    "post_list.html": (
        '{% if posts %}'
        '{% for post in posts %}'
        '<div class="post-item" data-id="{{ post.id }}">'
        '<div class="post-header"><div>'
        '<div class="post-title">{{ post.title }}</div>'
        '{% include "post_meta.html" %}'
        '</div></div>'
        '<div class="post-content">{{ post.content }}</div>'
        '{% include "post_tags.html" %}'
        '<div class="post-actions">'
        '<button class="view-btn" data-action="view" data-id="{{ post.id }}">View</button>'
        '<button class="edit-btn" data-action="edit" data-id="{{ post.id }}">Edit</button>'
        '<button class="delete-btn" data-action="delete" data-id="{{ post.id }}">Delete</button>'
        '</div>'
        '</div>'
        '{% endfor %}'
        '{% else %}'
        '<div class="empty-state"><h3>No posts found</h3>'
        '<p>{% if has_any_posts %}No posts match your search criteria.'
        '{% else %}Create your first post to get started!{% endif %}</p>'
        '</div>'
        '{% endif %}'
    ),
    "category_filter.html": (
        '<option value="">All Categories</option>'
        '{% for category in categories %}'
        '<option value="{{ category }}"{% if category == selected %} selected{% endif %}>{{ category }}</option>'
        '{% endfor %}'
    ),
    "post_form.html": (
        '<h2 id="form-title">{% if edit_mode %}Edit Post{% else %}Add New Post{% endif %}</h2>'
        '<form id="post-form">'
        '<input id="title" name="title" value="{{ values.title }}">'
        '<textarea id="content" name="content">{{ values.content }}</textarea>'
        '<input id="authorId" name="authorId" value="{{ values.authorId }}">'
        '<input id="category" name="category" value="{{ values.category }}">'
        '<input id="tags" name="tags" value="{{ values.tags }}">'
        '<button id="submit-btn" type="submit">{% if edit_mode %}Update Post{% else %}Add Post{% endif %}</button>'
        '{% if edit_mode %}<button id="cancel-btn" type="button">Cancel</button>{% endif %}'
        '</form>'
    ),
    "overlay.html": (
        '<div class="modal"><div class="modal-content">'
        '<div class="modal-header"><h2>{{ post.title }}</h2><span class="close">&times;</span></div>'
        '<div class="modal-body">'
        '{% include "post_meta.html" %}'
        '<div class="post-content-full">{{ post.content | nl2br }}</div>'
        '{% include "post_tags.html" %}'
        '</div></div></div>'
    ),
    "notification.html": '<div class="notification {{ notification.level }}">{{ notification.message }}</div>',
}


def build_environment() -> Environment:
    env = Environment(loader=DictLoader(TEMPLATES), autoescape=True)
    env.filters["format_date"] = format_date
    env.filters["split_tags"] = split_tags
    env.filters["nl2br"] = nl2br
    return env


class HtmlView(View):
    """Keeps the latest HTML of each page region in ``fragments``"""

    def __init__(self, confirm_answer: bool = True):
        self.env = build_environment()
        self.fragments: Dict[str, str] = {}
        self.notifications: List[str] = []
        self.confirm_answer = confirm_answer
        self.confirm_prompts: List[str] = []

    def _render(self, template: str, **context) -> str:
        return self.env.get_template(template).render(**context)

    def render_posts(self, posts: List[Dict[str, Any]], has_any_posts: bool) -> None:
        self.fragments["posts-list"] = self._render("post_list.html", posts=posts, has_any_posts=has_any_posts)

    def render_categories(self, categories: List[str], selected: str) -> None:
        self.fragments["category-filter"] = self._render(
            "category_filter.html", categories=categories, selected=selected
        )

    def render_form(self, values: Dict[str, str], edit_mode: bool) -> None:
        self.fragments["post-form"] = self._render("post_form.html", values=values, edit_mode=edit_mode)

    def show_overlay(self, post: Dict[str, Any]) -> None:
        self.fragments["overlay"] = self._render("overlay.html", post=post)

    def hide_overlay(self) -> None:
        self.fragments.pop("overlay", None)

    def show_notification(self, notification: Notification) -> None:
        self.notifications.append(self._render("notification.html", notification=notification))

    def hide_notification(self, notification: Notification) -> None:
        html = self._render("notification.html", notification=notification)
        if html in self.notifications:
            self.notifications.remove(html)

    def confirm(self, message: str) -> bool:
        self.confirm_prompts.append(message)
        return self.confirm_answer
