import inspect

import pytest

from specter.core.base import ExampleNode
from specter.core.dispatcher import EventDispatcher
from specter.core.dispatcher import Listener
from specter.core.exceptions import ExceptionFactory
from specter.core.inspector import AccessInspector
from specter.wrapper.wrapper import Wrapper


class VisibilityInspector(AccessInspector):
    """Treat underscore prefixed members as non-public."""

    def is_method_callable(self, target, name):
        if name.startswith("_"):
            return False
        return callable(getattr(target, name, None))

    def is_property_readable(self, target, name):
        return not name.startswith("_") and hasattr(target, name)

    def is_property_writable(self, target, name):
        if name.startswith("_"):
            return False
        member = inspect.getattr_static(type(target), name, None)
        if isinstance(member, property):
            return member.fset is not None
        return True


class Recorder(Listener):
    def __init__(self, log=None, **kwargs):
        super().__init__(**kwargs)
        self.log = log if log is not None else []

    def __call__(self, name, event):
        self.log.append((name, event.method, event.arguments))


@pytest.fixture
def inspector():
    return VisibilityInspector()


@pytest.fixture
def example():
    return ExampleNode("it adds two numbers", suite="Calculator")


@pytest.fixture
def log():
    return []


@pytest.fixture
def recorder(log):
    return Recorder(log)


@pytest.fixture
def dispatcher(recorder):
    return EventDispatcher([recorder])


@pytest.fixture
def exceptions():
    return ExceptionFactory()


@pytest.fixture
def wrapper(example, inspector, dispatcher, exceptions):
    return Wrapper(
        example,
        inspector,
        dispatcher=dispatcher,
        exceptions=exceptions,
    )
