from sqlalchemy.orm import joinedload

from feed_api.db import db
from feed_api.models.post_model import Post


def count_posts() -> int:
    return Post.query.count()


def get_posts_page(skip: int, limit: int):
    return (
        Post.query
        .options(joinedload(Post.creator))
        .order_by(Post.id.asc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def get_by_id(post_id: int):
    return db.session.get(Post, post_id)


def save(post: Post) -> Post:
    db.session.add(post)
    db.session.commit()
    return post


def delete_by_id(post_id: int) -> bool:
    post = db.session.get(Post, post_id)
    if not post:
        return False

    db.session.delete(post)
    db.session.commit()
    return True
