"""Unit tests for identity strings of callables."""

import functools
import unittest

import pytest
from parameterized import parameterized

from methodutils.reflection.descriptor import InvalidCallableError
from methodutils.reflection.identity import build_identity, get_param_names, render_value
from tests.utils import sample_api
from tests.utils.sample_api import Owner, load_all, untyped

pytestmark = pytest.mark.unit

MODULE = sample_api.__name__


class TestBuildIdentity(unittest.TestCase):
    """Tests for build_identity."""

    def test_bare_signature(self):
        self.assertEqual(build_identity(Owner.method), f"{MODULE}.Owner::method(p1:str,p2:int,p3:bool)")

    def test_matching_argument_count_appends_values(self):
        self.assertEqual(
            build_identity(Owner.method, "a", 2, True),
            f"{MODULE}.Owner::method(p1:str=a,p2:int=2,p3:bool=True)",
        )

    def test_deterministic(self):
        """Same callable and arguments give the same identity."""
        self.assertEqual(build_identity(Owner.method, "a", 2, True), build_identity(Owner.method, "a", 2, True))

    @parameterized.expand([("none", ()), ("fewer", ("a", 2)), ("more", ("a", 2, True, "extra"))])
    def test_mismatched_argument_count_omits_all_values(self, _name, args):
        identity = build_identity(Owner.method, *args)
        self.assertNotIn("=", identity)
        self.assertEqual(identity, build_identity(Owner.method))

    def test_every_segment_has_one_value_when_counts_match(self):
        identity = build_identity(Owner.method, "x", 7, False)
        segments = identity[identity.index("(") + 1 : -1].split(",")
        self.assertEqual(len(segments), 3)
        for segment in segments:
            self.assertEqual(segment.count("="), 1, segment)

    def test_values_differ_only_in_value_segments(self):
        first = build_identity(Owner.method, "a", 1, True)
        second = build_identity(Owner.method, "b", 2, False)
        self.assertNotEqual(first, second)
        self.assertEqual(first.split("=")[0], second.split("=")[0])

    def test_none_argument_renders_null_token(self):
        self.assertEqual(build_identity(Owner.rename, None), f"{MODULE}.Owner::rename(name:str=null)")

    def test_bound_method_matches_function_on_class(self):
        self.assertEqual(build_identity(Owner().method), build_identity(Owner.method))

    def test_classmethod_omits_cls(self):
        self.assertEqual(build_identity(Owner.build, 3), f"{MODULE}.Owner::build(size:int=3)")

    def test_staticmethod_untyped_parameter(self):
        self.assertEqual(build_identity(Owner.helper), f"{MODULE}.Owner::helper(value:typing.Any)")

    def test_staticmethod_keeps_parameter_named_self(self):
        self.assertEqual(
            build_identity(sample_api.Messenger.relay, "hi", 3),
            f"{MODULE}.Messenger::relay(self:str=hi,target:int=3)",
        )

    def test_module_level_function(self):
        self.assertEqual(build_identity(load_all, 5, True), f"{MODULE}::load_all(limit:int=5,verbose:typing.Any=True)")

    def test_no_parameters(self):
        def ping():
            return None

        identity = build_identity(ping)
        self.assertTrue(identity.endswith("<locals>::ping()"), identity)
        # zero arguments match zero parameters
        self.assertEqual(build_identity(ping), identity)

    def test_decorated_function_keeps_wrapped_identity(self):
        @functools.lru_cache
        def cached(key: str) -> str:
            return key

        self.assertTrue(build_identity(cached).endswith("::cached(key:str)"))

    @parameterized.expand([("none", None), ("int", 42), ("str", "Owner.method")])
    def test_invalid_callable(self, _name, value):
        with self.assertRaises(InvalidCallableError):
            build_identity(value)

    def test_partial_is_invalid(self):
        with self.assertRaises(InvalidCallableError):
            build_identity(functools.partial(untyped, 1))


class TestParamNames(unittest.TestCase):
    """Tests for get_param_names."""

    def test_method_omits_self(self):
        self.assertEqual(get_param_names(Owner.method), ["p1", "p2", "p3"])

    def test_function(self):
        self.assertEqual(get_param_names(untyped), ["a", "b"])

    def test_staticmethod_first_parameter_is_not_a_receiver(self):
        self.assertEqual(get_param_names(sample_api.Messenger.relay), ["self", "target"])

    def test_none_is_invalid(self):
        with self.assertRaises(InvalidCallableError):
            get_param_names(None)


@pytest.mark.parametrize(
    "value, expected",
    [("a", "a"), (2, "2"), (True, "True"), (None, "null"), ([1, 2], "[1, 2]")],
)
def test_render_value(value, expected):
    assert render_value(value) == expected
