from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta
from threading import Barrier

import pytest

from company_portal.core.exceptions import AccountNotFoundError
from company_portal.otp.service import OtpService, generate_code
from company_portal.security.passwords import hash_password, verify_password


@pytest.fixture
def svc(otps, users, fixed_now) -> OtpService:
    return OtpService(otps, users, clock=lambda: fixed_now)


def test_generate_code_is_six_digits():
    for _ in range(200):
        code = generate_code()
        assert len(code) == 6
        assert code.isdigit()
        assert 100000 <= int(code) <= 999999


def test_request_unknown_email_not_found(svc, otps):
    with pytest.raises(AccountNotFoundError):
        svc.request("nobody@company.com")
    assert otps.records == {}


def test_request_persists_code_with_five_minute_expiry(svc, otps, fixed_now):
    record = svc.request("pm@company.com")

    stored = otps.records[record.otp_id]
    assert stored.code == record.code
    assert stored.expires_at == fixed_now + timedelta(minutes=5)
    assert stored.consumed is False


def test_verify_is_idempotent_and_does_not_consume(svc, otps, fixed_now):
    record = svc.request("pm@company.com")

    assert svc.verify("pm@company.com", record.code) is True
    assert svc.verify("pm@company.com", record.code) is True
    assert otps.records[record.otp_id].consumed is False


def test_verify_rejects_wrong_code_and_wrong_email(svc):
    record = svc.request("pm@company.com")
    wrong = "100000" if record.code != "100000" else "100001"

    assert svc.verify("pm@company.com", wrong) is False
    assert svc.verify("hr@company.com", record.code) is False


def test_expired_code_never_matches(svc, fixed_now):
    record = svc.request("pm@company.com")

    assert svc.verify("pm@company.com", record.code, now=fixed_now + timedelta(minutes=5)) is False
    assert svc.verify("pm@company.com", record.code, now=fixed_now + timedelta(minutes=5, seconds=1)) is False
    assert svc.consume("pm@company.com", record.code, hash_password("newpass1"), now=fixed_now + timedelta(minutes=6)) is False


def test_consume_once_then_fails(svc, users):
    record = svc.request("pm@company.com")

    assert svc.consume("pm@company.com", record.code, hash_password("first-pass")) is True
    after_first = users.get_by_email("pm@company.com").password_hash

    assert svc.consume("pm@company.com", record.code, hash_password("second-pass")) is False
    assert users.get_by_email("pm@company.com").password_hash == after_first
    assert verify_password("first-pass", after_first)
    assert svc.verify("pm@company.com", record.code) is False


def test_failed_consume_leaves_password_untouched(svc, users):
    before = users.get_by_email("pm@company.com").password_hash
    svc.request("pm@company.com")

    assert svc.consume("pm@company.com", "000000", hash_password("hacked!")) is False
    assert users.get_by_email("pm@company.com").password_hash == before


def test_earlier_codes_stay_valid_after_new_request(svc):
    first = svc.request("pm@company.com")
    second = svc.request("pm@company.com")

    assert svc.verify("pm@company.com", first.code) is True
    assert svc.verify("pm@company.com", second.code) is True


def test_concurrent_consume_has_single_winner(svc, otps, users):
    record = svc.request("pm@company.com")
    workers = 8
    barrier = Barrier(workers)
    digests = [hash_password(f"pass-{i}") for i in range(workers)]

    def attempt(i: int) -> bool:
        barrier.wait()
        return svc.consume("pm@company.com", record.code, digests[i])

    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = list(pool.map(attempt, range(workers)))

    assert results.count(True) == 1
    winner = results.index(True)
    assert users.get_by_email("pm@company.com").password_hash == digests[winner]
    assert sum(1 for r in otps.records.values() if r.consumed) == 1


def test_delete_expired_only_removes_old_codes(svc, otps, fixed_now):
    old = svc.request("pm@company.com", now=fixed_now - timedelta(minutes=10))
    fresh = svc.request("pm@company.com")

    assert otps.delete_expired(before=fixed_now) == 1
    assert old.otp_id not in otps.records
    assert fresh.otp_id in otps.records
