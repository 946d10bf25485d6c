"""
End-to-end access scenarios across the rule library, policies and engine.
"""

import pytest

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from shared.config import EngineConfig
from shared.test_helpers import create_mock_resource, create_mock_subject, test_data_factory
from policy_engine import (
    Decision, PolicyEngine, Resource, Subject, anniversary_policy, baseline_policy,
    debug_policy, decide, is_allowed, strict_policy
)
from policy_engine.rules import ALLOW_BY_VISIBILITY, FREE_PREMIUM_ACCESS


class TestAccessScenarios:
    """Integration tests for the documented access scenarios."""

    @pytest.fixture
    def banned(self):
        """Ban list supplied by the embedding environment."""
        return test_data_factory.create_ban_list()

    @pytest.fixture
    def alice(self):
        return Subject(**create_mock_subject("alice", tier="basic"))

    def test_scenario_a_public_resource(self, alice, banned):
        """Basic subject reads a public resource owned by someone else."""
        resource = Resource(**create_mock_resource("public", owner_id="bob"))

        assert is_allowed(baseline_policy(banned), alice, resource, default_on_abstain=False) is True

    def test_scenario_b_premium_resource(self, alice, banned):
        """Basic subject is refused premium content until the promotion is inserted."""
        resource = Resource(**create_mock_resource("premium", owner_id="bob"))
        baseline = baseline_policy(banned)

        assert is_allowed(baseline, alice, resource, default_on_abstain=False) is False

        promo = baseline.with_evaluator_before(ALLOW_BY_VISIBILITY.name, FREE_PREMIUM_ACCESS, name="promo")
        assert is_allowed(promo, alice, resource, default_on_abstain=False) is True

    def test_scenario_c_banned_owner(self, banned):
        """Banned subject is refused their own public resource."""
        carol = Subject(**create_mock_subject("carol", tier="basic"))
        resource = Resource(**create_mock_resource("public", owner_id="carol"))

        assert "carol" in banned
        assert decide(baseline_policy(banned), carol, resource) is Decision.DENY
        assert is_allowed(baseline_policy(banned), carol, resource, default_on_abstain=True) is False


class TestPolicyCatalogMatrix:
    """Decisions of every named policy for the standard test data."""

    @pytest.fixture
    def engine(self):
        return PolicyEngine(EngineConfig(trace_decisions=True))

    @pytest.mark.parametrize("subject_id,visibility,owner_id,expected", [
        ("alice", "public", "bob", {"baseline": True, "anniversary": True, "strict": False, "debug": True}),
        ("alice", "premium", "bob", {"baseline": False, "anniversary": True, "strict": False, "debug": True}),
        ("alice", "private", "bob", {"baseline": False, "anniversary": False, "strict": False, "debug": True}),
        ("bob", "premium", "carol", {"baseline": True, "anniversary": True, "strict": False, "debug": True}),
        ("bob", "private", "bob", {"baseline": True, "anniversary": True, "strict": True, "debug": True}),
        ("carol", "public", "carol", {"baseline": False, "anniversary": False, "strict": False, "debug": True}),
        ("root", "private", "bob", {"baseline": True, "anniversary": True, "strict": True, "debug": True}),
    ])
    def test_matrix(self, engine, subject_id, visibility, owner_id, expected):
        """Every named policy gives its documented answer."""
        subjects = {s["subject_id"]: Subject(**s) for s in test_data_factory.create_test_subjects()}
        banned = test_data_factory.create_ban_list()
        resource = Resource(visibility=visibility, owner_id=owner_id)
        catalog = {
            "baseline": baseline_policy(banned),
            "anniversary": anniversary_policy(banned),
            "strict": strict_policy(banned),
            "debug": debug_policy(),
        }

        for name, policy in catalog.items():
            allowed = engine.is_allowed(policy, subjects[subject_id], resource, default_on_abstain=False)
            assert allowed is expected[name], name

    def test_strict_abstains_rather_than_denies(self, engine):
        """Strict policy has no opinion on public resources of others; the caller's default decides."""
        alice = Subject(subject_id="alice")
        resource = Resource(visibility="public", owner_id="bob")

        result = engine.evaluate(strict_policy(), alice, resource, default_on_abstain=True)

        assert result.decision is Decision.ABSTAIN
        assert result.allowed is True
