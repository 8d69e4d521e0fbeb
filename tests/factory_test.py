import pytest

from specter.core.exceptions import ClassNotFoundError
from specter.core.exceptions import FactoryDoesNotReturnObjectError
from specter.core.factory import ObjectFactory


class Temperature:
    def __init__(self, degrees):
        self.degrees = degrees

    @classmethod
    def celsius(cls, degrees):
        return cls(degrees)

    @classmethod
    def broken(cls):
        raise ArithmeticError("below absolute zero")

    @staticmethod
    def raw(degrees):
        return degrees


def freezing():
    return Temperature(0)


@pytest.fixture
def factory(exceptions):
    return ObjectFactory(exceptions)


@pytest.mark.unit
class TestObjectFactory:
    def test_callable(self, factory):
        built = factory.instantiate_from_callable(Temperature.celsius, [21])
        assert isinstance(built, Temperature)
        assert built.degrees == 21

    def test_class_and_name_pair(self, factory):
        built = factory.instantiate_from_callable((Temperature, "celsius"), [5])
        assert built.degrees == 5

    def test_dotted_class_and_name_pair(self, factory):
        built = factory.instantiate_from_callable(
            (f"{__name__}.Temperature", "celsius"), (7,)
        )
        assert built.degrees == 7

    def test_dotted_method_path(self, factory):
        built = factory.instantiate_from_callable(
            f"{__name__}.Temperature.celsius", [3]
        )
        assert built.degrees == 3

    def test_dotted_function_path(self, factory):
        built = factory.instantiate_from_callable(f"{__name__}.freezing")
        assert built.degrees == 0

    def test_unknown_class_in_pair(self, factory):
        with pytest.raises(ClassNotFoundError):
            factory.instantiate_from_callable(("nowhere.Missing", "build"))

    def test_unknown_dotted_path(self, factory):
        with pytest.raises(TypeError, match="not a known callable"):
            factory.instantiate_from_callable("nowhere.build")

    def test_not_callable(self, factory):
        with pytest.raises(TypeError, match="is not callable"):
            factory.instantiate_from_callable(42)

    def test_raw_result(self, factory):
        with pytest.raises(FactoryDoesNotReturnObjectError) as exc:
            factory.instantiate_from_callable(Temperature.raw, [12])
        assert exc.value.member == "raw"
        assert exc.value.arguments == [12]
        assert "returned 12 instead" in str(exc.value)

    def test_raw_result_reports_owner_class(self, factory):
        with pytest.raises(FactoryDoesNotReturnObjectError) as exc:
            factory.instantiate_from_callable((Temperature, "raw"), [1])
        assert exc.value.class_name == f"{__name__}.Temperature"

    def test_factory_errors_propagate(self, factory):
        with pytest.raises(ArithmeticError, match="absolute zero"):
            factory.instantiate_from_callable(Temperature.broken)

    def test_default_exception_factory(self):
        with pytest.raises(FactoryDoesNotReturnObjectError):
            ObjectFactory().instantiate_from_callable(lambda: None)
