from rest_framework_simplejwt.tokens import AccessToken

from student_hub.users.api.permissions import role_for


def issue_access_token(user) -> str:
    """Signed bearer token carrying the caller's role (and sid for students)."""

    token = AccessToken.for_user(user)
    token["role"] = role_for(user)
    token["emailid"] = user.email
    sid = getattr(user, "sid", None)
    if sid:
        token["sid"] = sid
    return str(token)
