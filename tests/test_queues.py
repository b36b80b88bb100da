import threading

import pytest

from spocklink.queues import Queue, SyncQueue


def make_queue(items):
    queue = Queue()
    for item in items:
        queue.push(item)
    return queue


def test_new_queue_is_empty():
    queue = Queue()
    assert queue.is_empty() is True
    assert len(queue) == 0


def test_pop_returns_elements_in_push_order():
    items = ["a", "b", "c", "d"]
    queue = make_queue(items)
    popped = [queue.pop() for _ in items]
    assert popped == items
    assert queue.is_empty() is True


def test_pop_empty_returns_none():
    queue = Queue()
    assert queue.pop() is None
    assert len(queue) == 0


def test_pop_after_draining_returns_none():
    queue = make_queue([1])
    assert queue.pop() == 1
    assert queue.pop() is None


def test_peek_does_not_remove():
    queue = make_queue(["first", "second"])
    assert queue.peek() == "first"
    assert queue.peek() == "first"
    assert len(queue) == 2


def test_peek_empty_returns_none():
    assert Queue().peek() is None


def test_push_after_pop_keeps_fifo_order():
    queue = make_queue([1, 2])
    assert queue.pop() == 1
    queue.push(3)
    assert [queue.pop(), queue.pop()] == [2, 3]


def test_len_tracks_pushes_and_pops():
    queue = make_queue(range(5))
    assert len(queue) == 5
    queue.pop()
    assert len(queue) == 4
    assert queue.is_empty() is False


def test_clean_drops_everything():
    queue = make_queue(["x", "y"])
    queue.clean()
    assert len(queue) == 0
    assert queue.peek() is None


def test_clean_and_destroy_elements_visits_in_order():
    items = ["p", "q", "r"]
    queue = make_queue(items)
    destroyed = []
    queue.clean_and_destroy_elements(destroyed.append)
    assert destroyed == items
    assert queue.is_empty() is True


def test_clean_and_destroy_on_empty_calls_nothing():
    destroyed = []
    Queue().clean_and_destroy_elements(destroyed.append)
    assert destroyed == []


@pytest.mark.parametrize("items", [[None], [0, 0], [[], {}]])
def test_falsy_elements_round_trip(items):
    queue = make_queue(items)
    assert [queue.pop() for _ in items] == items
    assert len(queue) == 0


def test_sync_queue_fifo():
    queue = SyncQueue()
    for item in ["m1", "m2", "m3"]:
        queue.push(item)
    assert len(queue) == 3
    assert [queue.pop(), queue.pop(), queue.pop()] == ["m1", "m2", "m3"]
    assert queue.pop() is None


def test_sync_queue_concurrent_pushes_are_all_kept():
    queue = SyncQueue()
    per_thread = 200
    threads = [
        threading.Thread(target=lambda base=base: [queue.push(base * per_thread + n) for n in range(per_thread)])
        for base in range(4)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert len(queue) == 4 * per_thread
    drained = []
    while (value := queue.pop()) is not None:
        drained.append(value)
    assert sorted(drained) == list(range(4 * per_thread))


def test_sync_queue_concurrent_pops_do_not_duplicate():
    queue = SyncQueue()
    total = 500
    for n in range(total):
        queue.push(n)
    results = []
    results_lock = threading.Lock()

    def worker():
        while (value := queue.pop()) is not None:
            with results_lock:
                results.append(value)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert sorted(results) == list(range(total))
    assert len(queue) == 0