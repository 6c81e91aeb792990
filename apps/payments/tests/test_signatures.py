import hashlib
import hmac

from apps.payments.signatures import compute_signature, verify_signature


def _reference(message: str, secret: str) -> str:
    return hmac.new(secret.encode(), message.encode(), hashlib.sha256).hexdigest()


def test_signature_is_hmac_of_order_and_payment():
    assert compute_signature("order_1", "pay_1", "s") == _reference("order_1|pay_1", "s")


def test_signature_is_deterministic():
    assert compute_signature("order_1", "pay_1", "s") == compute_signature("order_1", "pay_1", "s")


def test_only_the_exact_digest_verifies():
    good = _reference("order_1|pay_1", "s")

    assert verify_signature("order_1", "pay_1", good, "s")
    assert not verify_signature("order_1", "pay_1", good.upper(), "s")
    assert not verify_signature("order_1", "pay_1", _reference("order_1pay_1", "s"), "s")
    assert not verify_signature("order_1", "pay_1", _reference("order_1|pay_1", "t"), "s")
    assert not verify_signature("order_1", "pay_1", "", "s")


def test_single_character_mutation_fails():
    good = compute_signature("order_1", "pay_1", "s")

    assert not verify_signature("order_2", "pay_1", good, "s")
    assert not verify_signature("order_1", "pay_2", good, "s")
    assert not verify_signature("order_1", "pay_1 ", good, "s")
    assert not verify_signature("order_1", "pay_1", good[:-1] + ("0" if good[-1] != "0" else "1"), "s")


def test_empty_secret_never_verifies():
    assert not verify_signature("order_1", "pay_1", compute_signature("order_1", "pay_1", ""), "")
