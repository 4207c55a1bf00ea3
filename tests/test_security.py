"""Password hashing and bearer tokens."""

from datetime import timedelta

from mentormatch.utils.security import (
    authenticate_user,
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)


def test_password_hash_roundtrip():
    hashed = get_password_hash("Password@123")

    assert hashed != "Password@123"
    assert verify_password("Password@123", hashed) is True
    assert verify_password("wrong", hashed) is False


def test_passwords_longer_than_bcrypt_limit_compare_on_first_72_bytes():
    hashed = get_password_hash("a" * 72 + "tail-one")

    assert verify_password("a" * 72 + "tail-two", hashed) is True


def test_token_carries_email_and_role():
    token = create_access_token("ada@test.com", "mentor")

    data = decode_access_token(token)

    assert data.email == "ada@test.com"
    assert data.role == "mentor"


def test_expired_or_tampered_token_is_rejected():
    expired = create_access_token("ada@test.com", "mentor", expires_delta=timedelta(minutes=-1))

    assert decode_access_token(expired) is None
    assert decode_access_token(create_access_token("ada@test.com", "mentor") + "x") is None
    assert decode_access_token("not-a-token") is None


def test_authenticate_user(db_session, make_user):
    user = make_user(name="Ada")
    user.password_hash = get_password_hash("Password@123")
    db_session.commit()

    assert authenticate_user(db_session, user.email, "Password@123").id == user.id
    assert authenticate_user(db_session, user.email, "nope") is None
    assert authenticate_user(db_session, "ghost@test.com", "Password@123") is None
