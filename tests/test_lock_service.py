import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from shopzone.domain.errors import CheckoutInProgress
from shopzone.services.lock_service import LockService


class DictRedis:
    """Just enough of the redis client for SET NX EX and the release script."""

    def __init__(self):
        self.data = {}
        self.ttls = {}
        self.fail_eval = False

    def set(self, name, value, nx=False, ex=None):
        if nx and name in self.data:
            return None
        self.data[name] = value
        self.ttls[name] = ex
        return True

    def eval(self, script, numkeys, key, owner):
        if self.fail_eval:
            raise RedisConnectionError("connection lost")
        if self.data.get(key) == owner:
            del self.data[key]
            return 1
        return 0


@pytest.fixture
def client():
    return DictRedis()


@pytest.fixture
def locks(client):
    return LockService(client=client)


def test_lock_is_exclusive_per_user(locks, client):
    assert locks.acquire_checkout_lock("u1", "a", 30)
    assert not locks.acquire_checkout_lock("u1", "b", 30)
    assert locks.acquire_checkout_lock("u2", "b", 30)
    assert client.ttls[locks.checkout_key("u1")] == 30


def test_only_owner_can_release(locks, client):
    locks.acquire_checkout_lock("u1", "a", 30)

    assert not locks.release_checkout_lock("u1", "b")
    assert locks.checkout_key("u1") in client.data
    assert locks.release_checkout_lock("u1", "a")
    assert client.data == {}


def test_context_manager_releases_on_error(locks, client):
    with pytest.raises(ValueError):
        with locks.checkout_lock("u1", ttl=5):
            assert locks.checkout_key("u1") in client.data
            raise ValueError("checkout failed")

    assert client.data == {}


def test_held_lock_raises_checkout_in_progress(locks):
    with locks.checkout_lock("u1"):
        with pytest.raises(CheckoutInProgress):
            with locks.checkout_lock("u1"):
                pass


def test_release_failure_does_not_mask_result(locks, client):
    client.fail_eval = True

    with locks.checkout_lock("u1") as owner:
        assert owner

    # left to expire through its ttl
    assert locks.checkout_key("u1") in client.data
