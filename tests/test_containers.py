import pytest

from clinisim.containers import ArrayStack, LinkedQueue, PriQueue


def test_queue_is_fifo():
    queue = LinkedQueue()
    for item in ["a", "b", "c"]:
        queue.enqueue(item)
    assert [queue.dequeue() for _ in range(3)] == ["a", "b", "c"]
    assert len(queue) == 0


def test_queue_initial_items_and_peek():
    queue = LinkedQueue([1, 2, 3])
    assert queue.peek() == 1
    assert len(queue) == 3
    assert list(queue) == [1, 2, 3]


def test_queue_empty_errors():
    queue = LinkedQueue()
    with pytest.raises(IndexError):
        queue.dequeue()
    with pytest.raises(IndexError):
        queue.peek()


def test_queue_format_limits():
    queue = LinkedQueue(["a", "b", "c"])
    assert queue.format(2) == "a, b"
    assert queue.format() == "a, b, c"
    assert queue.format(10) == "a, b, c"
    assert LinkedQueue().format() == ""


def test_priqueue_orders_by_priority_then_arrival():
    queue = PriQueue()
    queue.enqueue("a", 1)
    queue.enqueue("b", 5)
    queue.enqueue("c", 1)
    queue.enqueue("d", 5)
    assert list(queue) == ["b", "d", "a", "c"]
    assert queue.dequeue() == ("b", 5)
    assert len(queue) == 3


def test_priqueue_negative_priorities():
    queue = PriQueue()
    queue.enqueue("late", -10)
    queue.enqueue("soon", -2)
    assert queue.peek() == ("soon", -2)
    assert len(queue) == 2


def test_priqueue_empty_errors():
    queue = PriQueue()
    with pytest.raises(IndexError):
        queue.dequeue()
    with pytest.raises(IndexError):
        queue.peek()


def test_priqueue_format():
    queue = PriQueue()
    queue.enqueue("x", 0)
    queue.enqueue("y", 3)
    assert queue.format() == "y, x"


def test_stack_is_lifo_and_iterates_from_top():
    stack = ArrayStack()
    for item in ["a", "b", "c"]:
        stack.push(item)
    assert list(stack) == ["c", "b", "a"]
    assert stack.format() == "c, b, a"
    assert stack.peek() == "c"
    assert stack.pop() == "c"
    assert len(stack) == 2


def test_stack_default_capacity():
    assert ArrayStack().capacity == 200


def test_stack_full_and_empty_errors():
    stack = ArrayStack(capacity=1)
    stack.push(1)
    with pytest.raises(IndexError):
        stack.push(2)
    assert stack.pop() == 1
    with pytest.raises(IndexError):
        stack.pop()
    with pytest.raises(IndexError):
        stack.peek()