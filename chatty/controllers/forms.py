"""Provides forms for signup and signin payloads."""

from typing import Any, Optional

from wtforms import Form, PasswordField, StringField
from wtforms.validators import DataRequired, Email, Length, StopValidation


class IsString(object):
    """Stop the chain if a value was given but is not a string."""

    def __init__(self, message: str) -> None:
        self.message = message

    def __call__(self, form: Form, field: Any) -> None:
        if field.data is not None and not isinstance(field.data, str):
            raise StopValidation(self.message)


class PayloadForm(Form):
    """A form filled from a JSON payload instead of form data."""

    def __init__(self, payload: Optional[dict] = None) -> None:
        super(PayloadForm, self).__init__(data=payload or {})

    @property
    def first_error(self) -> Optional[str]:
        """The first error message, in field declaration order."""
        for messages in self.errors.values():
            if messages:
                return str(messages[0])
        return None


class SignUpForm(PayloadForm):
    """Signup payload."""

    username = StringField('Username', validators=[
        IsString('Username must be of type string'),
        DataRequired('Username is a required field'),
        Length(min=4, max=8, message='Invalid username')
    ])
    email = StringField('Email', validators=[
        IsString('Email must be of type string'),
        DataRequired('Email is a required field'),
        Email('Email must be valid')
    ])
    password = PasswordField('Password', validators=[
        IsString('Password must be of type string'),
        DataRequired('Password is a required field'),
        Length(min=4, max=8, message='Invalid password')
    ])
    avatarColor = StringField('Avatar color', validators=[
        IsString('Avatar color must be of type string'),
        DataRequired('Avatar color is required')
    ])
    avatarImage = StringField('Avatar image', validators=[
        IsString('Avatar image must be of type string'),
        DataRequired('Avatar image is required')
    ])


class SignInForm(PayloadForm):
    """Signin payload."""

    username = StringField('Username', validators=[
        IsString('Username must be of type string'),
        DataRequired('Username is a required field'),
        Length(min=4, max=8, message='Invalid username')
    ])
    password = PasswordField('Password', validators=[
        IsString('Password must be of type string'),
        DataRequired('Password is a required field'),
        Length(min=4, max=8, message='Invalid password')
    ])
