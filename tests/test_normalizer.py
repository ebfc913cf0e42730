import random
import string

import pytest

from cabinet_quote.normalizer import RULES, apply_rules, normalize


def _rule(name: str):
    return next(rule for rule in RULES if rule.name == name)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("B30", "B30"),
        ('Base Cabinet 30" Wide', "B30"),
        ("base 30", "B30"),
        ("30 B", "B30"),
        ("B30 BUTT.1", "B30"),
        ("W2430 X 24 DP", "W2430"),
        ("W30 x 30", "W3030"),
        ("SINK BASE 36", "SB36"),
        ("Vanity Sink Base 30", "VSB30"),
        ("B18 L", "B18"),
        ("DB24-2", "DB24"),
        ("HINGE-SOFTCLOSE", "HINGESOFTCLOSE"),
        ("TK8", "TK8"),
    ],
)
def test_normalize_known_labels(raw: str, expected: str) -> None:
    assert normalize(raw) == expected


def test_normalize_empty_input_returns_empty_string() -> None:
    assert normalize("") == ""
    assert normalize(None) == ""
    assert normalize("   ") == ""


@pytest.mark.parametrize(
    "raw",
    ['Base Cabinet 30" Wide', "30 B", "B30 BUTT.1", "C ABINET", "W 30 X 30 X 12 DP", "sink-base 33 .2 R", "?!"],
)
def test_normalize_is_idempotent(raw: str) -> None:
    once = normalize(raw)
    assert normalize(once) == once


def test_uppercase_rule_drops_quotes_and_noise_words() -> None:
    assert _rule("uppercase").apply('wall cabinet 30" high') == "WALL 30"


def test_type_words_rule_prefers_most_specific_phrase() -> None:
    apply = _rule("type_words").apply
    assert apply("SINK BASE 36") == "SB36"
    assert apply("BLIND BASE CORNER 42") == "BBC42"
    assert apply("DRAWER BASE 18") == "DB18"


def test_depth_rule_removes_depth_and_joins_pairs() -> None:
    apply = _rule("depth").apply
    assert apply("W2430 X 24 DP") == "W2430"
    assert apply("B30 24 DEEP") == "B30"
    assert apply("W30 X 30") == "W3030"


def test_options_rule_keeps_leading_token() -> None:
    apply = _rule("options").apply
    assert apply("TK8") == "TK8"
    assert apply("B30 BUTT").strip() == "B30"
    assert apply("W3030 ROT L").split() == ["W3030"]


def test_suffixes_rule_strips_tags_and_orientation() -> None:
    apply = _rule("suffixes").apply
    assert apply("B30.1") == "B30"
    assert apply("B30-2") == "B30"
    assert apply("B30 R") == "B30"
    assert apply("B30-") == "B30"


def test_reversed_rule_swaps_number_first_labels() -> None:
    assert _rule("reversed").apply("30 SB") == "SB 30"
    assert _rule("reversed").apply("B 30") == "B 30"


def test_collapse_rule_keeps_only_alphanumerics() -> None:
    assert _rule("collapse").apply("B-30 /L") == "B30L"


def test_apply_rules_runs_a_single_pass_with_custom_rules() -> None:
    rules = [rule for rule in RULES if rule.name in ("uppercase", "collapse")]
    assert apply_rules("b-30 cabinet", rules) == "B30"


def test_normalize_is_idempotent_on_random_labels() -> None:
    rng = random.Random(20240611)
    alphabet = string.ascii_letters + string.digits + " .-_/\"'xX"
    words = ["BASE", "SINK", "WALL", "CABINET", "BUTT", "DP", "X", "L", "R", "30", "24"]

    for _ in range(2000):
        parts = [
            rng.choice(words) if rng.random() < 0.4 else "".join(rng.choices(alphabet, k=rng.randint(1, 6)))
            for _ in range(rng.randint(1, 5))
        ]
        once = normalize(" ".join(parts))
        assert normalize(once) == once
