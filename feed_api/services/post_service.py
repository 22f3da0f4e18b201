import logging

from flask import current_app
from marshmallow import ValidationError

from feed_api.errors import Forbidden, InternalError, NotFound, Unauthenticated, ValidationFailed
from feed_api.models.post_model import Post
from feed_api.repositories import post_repository, user_repository
from feed_api.schemas.post_schema import (
    post_input_schema,
    post_schema,
    posts_with_creator_schema,
)
from feed_api.services.image_service import clear_image, save_image


logger = logging.getLogger(__name__)

DEFAULT_POSTS_PER_PAGE = 2


def _validate_input(title, content):
    try:
        return post_input_schema.load({"title": title, "content": content})
    except ValidationError as e:
        raise ValidationFailed(data=e.messages) from e


def _get_post_or_404(post_id):
    post = post_repository.get_by_id(post_id)
    if not post:
        raise NotFound("Could not find post.")
    return post


def _check_owner(post, user_id):
    if str(post.creator_id) != str(user_id):
        raise Forbidden("Not authorized!")


def _creator_id(user_id) -> int:
    try:
        return int(user_id)
    except (TypeError, ValueError) as e:
        raise Unauthenticated() from e


def _get_creator(user_id):
    user = user_repository.get_by_id(user_id)
    if not user:
        # Token identities are trusted; a missing user is a server-side fault.
        raise InternalError(f"Could not find user {user_id}.")
    return user


def get_posts(page: int = 1, per_page: int | None = None):
    if page is None:
        page = 1
    if page < 1:
        raise ValidationFailed("Page must be a positive integer.")
    if per_page is None:
        per_page = current_app.config.get("POSTS_PER_PAGE", DEFAULT_POSTS_PER_PAGE)

    total_items = post_repository.count_posts()
    posts = post_repository.get_posts_page(skip=(page - 1) * per_page, limit=per_page)

    return {
        "posts": posts_with_creator_schema.dump(posts),
        "totalItems": total_items,
    }


def create_post(title, content, image, user_id):
    fields = _validate_input(title, content)
    if image is None or not getattr(image, "filename", ""):
        raise ValidationFailed("No image provided.")

    creator_id = _creator_id(user_id)
    image_url = save_image(image)

    post = post_repository.save(
        Post(
            title=fields["title"],
            content=fields["content"],
            image_url=image_url,
            creator_id=creator_id,
        )
    )

    # The post is committed before the creator's back-reference.
    user = _get_creator(user_id)
    user.posts.append(post.id)
    user_repository.save(user)

    logger.info("User %s created post %s", user_id, post.id)
    return {
        "post": post_schema.dump(post),
        "creator": user.to_summary(),
    }


def get_post(post_id):
    return post_schema.dump(_get_post_or_404(post_id))


def update_post(post_id, title, content, image_url, image_file, user_id):
    fields = _validate_input(title, content)

    has_new_file = image_file is not None and bool(getattr(image_file, "filename", ""))
    if not has_new_file and not image_url:
        raise ValidationFailed("No file picked.")

    post = _get_post_or_404(post_id)
    _check_owner(post, user_id)

    if has_new_file:
        image_url = save_image(image_file)

    if image_url != post.image_url:
        clear_image(post.image_url)

    post.title = fields["title"]
    post.content = fields["content"]
    post.image_url = image_url
    post_repository.save(post)

    logger.info("User %s updated post %s", user_id, post.id)
    return post_schema.dump(post)


def delete_post(post_id, user_id):
    post = _get_post_or_404(post_id)
    _check_owner(post, user_id)

    removed_id = post.id
    clear_image(post.image_url)
    post_repository.delete_by_id(removed_id)

    user = _get_creator(user_id)
    user.posts = [pid for pid in user.posts if pid != removed_id]
    user_repository.save(user)

    logger.info("User %s deleted post %s", user_id, post_id)
