"""Tests for the Did You Know? fact picker."""
import random

from components.facts import SPACE_FACTS, random_fact


def test_random_fact_comes_from_the_fact_list():
    assert random_fact() in SPACE_FACTS


def test_random_fact_is_reproducible_with_seeded_rng():
    assert random_fact(random.Random(7)) == random_fact(random.Random(7))
