from feed_api.db import db
from feed_api.models.user_model import User


def get_by_id(user_id):
    try:
        user_id = int(user_id)
    except (TypeError, ValueError):
        return None
    return db.session.get(User, user_id)


def get_by_email(email: str):
    return User.query.filter_by(email=email).first()


def create_user(email, password_hash, name):
    user = User(
        email=email,
        password_hash=password_hash,
        name=name,
        posts=[],
    )
    db.session.add(user)
    db.session.commit()
    return user


def save(user: User) -> User:
    db.session.add(user)
    db.session.commit()
    return user
