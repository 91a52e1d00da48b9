"""
Forum Service - bug reports and feature requests from restaurant admins
"""
import logging

from services.errors import AuthenticationRequiredError, ValidationError
from services.models import ActionResult

logger = logging.getLogger(__name__)

FORUM_POST_TYPES = ('bug', 'feature')
TITLE_LENGTH = (5, 100)
CONTENT_LENGTH = (20, 5000)


def validate_post_data(data):
    """Return the title, content and type of a new post or raise ValidationError"""
    title = data.get('title')
    if not isinstance(title, str) or not TITLE_LENGTH[0] <= len(title.strip()) <= TITLE_LENGTH[1]:
        raise ValidationError(f"Title must be between {TITLE_LENGTH[0]} and {TITLE_LENGTH[1]} characters long.")

    content = data.get('content')
    if not isinstance(content, str) or not CONTENT_LENGTH[0] <= len(content.strip()) <= CONTENT_LENGTH[1]:
        raise ValidationError(f"Content must be between {CONTENT_LENGTH[0]} and {CONTENT_LENGTH[1]} characters long.")

    post_type = data.get('type')
    if post_type not in FORUM_POST_TYPES:
        raise ValidationError(f"type must be one of: {', '.join(FORUM_POST_TYPES)}")

    return {'title': title.strip(), 'content': content.strip(), 'type': post_type}


class ForumService:
    """Service for the feedback forum"""

    def __init__(self, firebase_service):
        self.firebase_service = firebase_service

    def create_post(self, data, owner_uid, owner_email=None):
        """
        Create a forum post for the signed-in admin

        Returns:
            ActionResult carrying the new post id, or the reason it was refused
        """
        try:
            if not owner_uid:
                raise AuthenticationRequiredError("User not authenticated. Cannot create post.")
            post = self.firebase_service.create_forum_post({
                **validate_post_data(data),
                'ownerUID': owner_uid,
                'ownerEmail': owner_email,
                'status': 'open'
            })
        except (AuthenticationRequiredError, ValidationError) as e:
            return ActionResult(success=False, message=str(e))
        except Exception as e:
            logger.error(f"Error adding forum post: {str(e)}")
            return ActionResult(success=False, message=str(e) or "An unknown error occurred.")

        return ActionResult(success=True, message=f"Post created with ID: {post['id']}")

    def get_my_posts(self, owner_uid):
        """The admin's own posts, newest first. Empty when they cannot be read."""
        if not owner_uid:
            logger.warning("Forum posts requested without an authenticated user. Returning no posts.")
            return []
        try:
            return self.firebase_service.get_forum_posts(owner_uid)
        except Exception as e:
            logger.error(f"Error fetching forum posts for owner {owner_uid}: {str(e)}")
            return []
