from sqlalchemy.ext.mutable import MutableList

from feed_api.db import db


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    name = db.Column(db.String(120), nullable=False)
    status = db.Column(db.String(255), nullable=False, default="I am new!")

    # Ids of the posts this user created, in creation order.
    posts = db.Column(MutableList.as_mutable(db.JSON), nullable=False, default=list)

    def to_summary(self):
        return {
            "id": self.id,
            "name": self.name,
        }
