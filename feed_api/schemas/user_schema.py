from marshmallow import EXCLUDE, pre_load, validate

from feed_api.extensions.extensions import ma


class _StrippedSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    @pre_load
    def strip_strings(self, data, **kwargs):
        return {
            key: value.strip() if isinstance(value, str) and key != "password" else value
            for key, value in data.items()
        }


class SignupSchema(_StrippedSchema):
    email = ma.Email(required=True)
    password = ma.Str(required=True, validate=validate.Length(min=5))
    name = ma.Str(required=True, validate=validate.Length(min=1))


class LoginSchema(_StrippedSchema):
    email = ma.Str(required=True)
    password = ma.Str(required=True)


class StatusSchema(_StrippedSchema):
    status = ma.Str(required=True, validate=validate.Length(min=1))


signup_schema = SignupSchema()
login_schema = LoginSchema()
status_schema = StatusSchema()
