"""
Post board controller: connects user actions, the API client and a view
"""

import asyncio
import logging
from typing import Any, Dict, Optional

from blog_api.client.api import ApiError, PostsApiClient
from blog_api.client.state import ClientState, Notification, empty_form, form_from_post
from blog_api.client.view import View

logger = logging.getLogger(__name__)

NOTIFICATION_SECONDS = 3.0


class PostController:
    """
    Drives the post board.

    All user-facing failures are reported as transient notifications; a
    failed call never modifies the cached posts or the edit target.
    """

    def __init__(
        self,
        api: PostsApiClient,
        view: View,
        state: Optional[ClientState] = None,
        notification_seconds: float = NOTIFICATION_SECONDS
    ):
        self.api = api
        self.view = view
        self.state = state or ClientState()
        self.notification_seconds = notification_seconds

    async def start(self) -> None:
        """Initial page load"""
        self.view.render_form(empty_form(), edit_mode=False)
        await self.load_posts()

    async def load_posts(self) -> None:
        """Fetch the full, unfiltered list and render it"""
        try:
            posts = await self.api.list_posts()
            categories = await self.api.list_categories()
        except ApiError as e:
            self.notify(f"Error loading posts: {e.message}", "error")
            self.view.render_posts(self.state.visible_posts, has_any_posts=bool(self.state.posts))
            return

        self.state.posts = posts
        self.state.visible_posts = list(posts)
        self.state.categories = categories
        self.state.search = ""
        self.state.category = ""
        self.view.render_categories(categories, selected="")
        self.view.render_posts(posts, has_any_posts=bool(posts))

    async def apply_filter(self, search: str = "", category: str = "") -> None:
        """Re-fetch with the current search box and category selection"""
        try:
            posts = await self.api.list_posts(search=search or None, category=category or None)
        except ApiError as e:
            self.notify(f"Error filtering posts: {e.message}", "error")
            return

        self.state.search = search
        self.state.category = category
        self.state.visible_posts = posts
        self.view.render_posts(posts, has_any_posts=bool(self.state.posts))

    async def submit_form(self, form: Dict[str, Any]) -> bool:
        """
        Create a post, or update the edit target when one is set

        Returns:
            True when the server accepted the post
        """
        try:
            if self.state.is_editing:
                await self.api.update_post(self.state.edit_target, form)
                message = "Post updated successfully!"
            else:
                await self.api.create_post(form)
                message = "Post created successfully!"
        except ApiError as e:
            self.notify(f"Error: {e.message}", "error")
            return False

        self.notify(message, "success")
        self.reset_form()
        await self.load_posts()
        return True

    def start_edit(self, post_id: int) -> bool:
        """Populate the form from a cached post and switch to edit mode"""
        post = self.state.find_post(post_id)
        if post is None:
            return False
        self.state.edit_target = post["id"]
        self.view.render_form(form_from_post(post), edit_mode=True)
        return True

    def cancel_edit(self) -> None:
        self.reset_form()

    def reset_form(self) -> None:
        self.state.edit_target = None
        self.view.render_form(empty_form(), edit_mode=False)

    async def delete_post(self, post_id: int) -> bool:
        if not self.view.confirm("Are you sure you want to delete this post?"):
            return False
        try:
            await self.api.delete_post(post_id)
        except ApiError as e:
            self.notify(f"Error: {e.message}", "error")
            return False

        if self.state.edit_target is not None and str(self.state.edit_target) == str(post_id):
            self.reset_form()
        await self.load_posts()
        self.notify("Post deleted successfully!", "success")
        return True

    async def view_post(self, post_id: int) -> None:
        """Fetch a single post and show it in the overlay"""
        try:
            post = await self.api.get_post(post_id)
        except ApiError as e:
            self.notify(f"Error: {e.message}", "error")
            return
        self.state.overlay_post = post
        self.view.show_overlay(post)

    def overlay_clicked(self, inside_content: bool) -> None:
        """Clicks on the backdrop close the overlay, clicks on its content do not"""
        if not inside_content:
            self.close_overlay()

    def close_overlay(self) -> None:
        if self.state.overlay_post is None:
            return
        self.state.overlay_post = None
        self.view.hide_overlay()

    def notify(self, message: str, level: str = "info") -> Notification:
        """Show a notification and schedule its dismissal"""
        notification = Notification(message=message, level=level)
        self.state.notifications.append(notification)
        self.view.show_notification(notification)
        logger.debug(f"Notification ({level}): {message}")

        asyncio.get_running_loop().call_later(self.notification_seconds, self.dismiss, notification)
        return notification

    def dismiss(self, notification: Notification) -> None:
        if notification in self.state.notifications:
            self.state.notifications.remove(notification)
            self.view.hide_notification(notification)
