from argot.signature import infer_arg_names, infer_arg_types, infer_arity
from argot.param_types import ParamType
from argot.utils import ensure_async


def no_args():
    pass


def two_args(source, target):
    pass


def optional(name, greeting="Hello"):
    pass


def variadic(first, *rest):
    pass


def typed(times: int, label: str, anything):
    pass


async def async_one(value):
    pass


def test_infer_arity():
    assert infer_arity(None) == (0, 0)
    assert infer_arity(no_args) == (0, 0)
    assert infer_arity(two_args) == (2, 2)
    assert infer_arity(optional) == (1, 2)
    assert infer_arity(variadic) == (1, None)
    assert infer_arity(async_one) == (1, 1)


def test_infer_arity_follows_async_wrapper():
    assert infer_arity(ensure_async(two_args)) == (2, 2)


def test_infer_arity_ignores_keyword_only():
    def keyword_only(value, *, flag=False):
        pass

    assert infer_arity(keyword_only) == (1, 1)


def test_infer_arg_names():
    assert infer_arg_names(optional) == ["name", "greeting"]
    assert infer_arg_names(None) == []


def test_infer_arg_types():
    assert infer_arg_types(typed) == [ParamType.INT, ParamType.STR, None]
