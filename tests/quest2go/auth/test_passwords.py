import pytest

from quest2go.auth.passwords import DEFAULT_ROUNDS, PasswordHasher
from quest2go.core.errors import ValidationError


def test_hash_embeds_salt_and_cost_factor() -> None:
    hasher = PasswordHasher(rounds=4)

    digest = hasher.hash('p1')

    assert digest.startswith('$2b$04$')
    assert digest != hasher.hash('p1')


def test_default_work_factor_is_ten() -> None:
    assert DEFAULT_ROUNDS == 10
    assert PasswordHasher().hash('p1').startswith('$2b$10$')


def test_verify_accepts_only_the_original_password(hasher) -> None:
    digest = hasher.hash('correct horse')

    assert hasher.verify('correct horse', digest) is True
    assert hasher.verify('correct horse ', digest) is False
    assert hasher.verify('Correct horse', digest) is False
    assert hasher.verify('', digest) is False


@pytest.mark.parametrize('digest', ['', 'not-a-bcrypt-hash', '$2b$04$short'])
def test_verify_returns_false_for_malformed_digest(hasher, digest: str) -> None:
    assert hasher.verify('p1', digest) is False


def test_hash_rejects_passwords_bcrypt_cannot_accept(hasher) -> None:
    with pytest.raises(ValidationError):
        hasher.hash('x' * 100)


def test_hash_rejects_password_without_utf8_form(hasher) -> None:
    with pytest.raises(ValidationError) as exception_info:
        hasher.hash('abc\ud800')

    assert exception_info.value.status_code == 400
    assert exception_info.value.message == 'Password contains invalid characters'


def test_verify_returns_false_for_password_without_utf8_form(hasher) -> None:
    assert hasher.verify('\ud800', hasher.hash('p1')) is False
