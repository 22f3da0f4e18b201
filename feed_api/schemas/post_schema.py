from marshmallow import EXCLUDE, pre_load, validate

from feed_api.extensions.extensions import ma


class PostInputSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    title = ma.Str(required=True, validate=validate.Length(min=5))
    content = ma.Str(required=True, validate=validate.Length(min=5))

    @pre_load
    def strip_strings(self, data, **kwargs):
        return {
            key: value.strip() if isinstance(value, str) else value
            for key, value in data.items()
        }


class CreatorSchema(ma.Schema):
    id = ma.Int()
    name = ma.Str()


class PostSchema(ma.Schema):
    id = ma.Int()
    title = ma.Str()
    content = ma.Str()
    imageUrl = ma.Str(attribute="image_url")
    creator = ma.Int(attribute="creator_id")
    createdAt = ma.DateTime(attribute="created_at")
    updatedAt = ma.DateTime(attribute="updated_at")


class PostWithCreatorSchema(PostSchema):
    creator = ma.Nested(CreatorSchema)


post_input_schema = PostInputSchema()
post_schema = PostSchema()
posts_with_creator_schema = PostWithCreatorSchema(many=True)
