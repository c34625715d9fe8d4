"""
Tests for rule templates.
"""

import pytest

from permix import InvalidRulesError, Permix, template, templator


class TestTemplate:
    """Rules defined ahead of any instance."""

    def test_static_template(self):
        """A static template returns its rules and can be set up later."""
        rules = {
            "post": {"create": True, "read": True},
            "comment": {"create": True, "read": True, "update": True},
        }

        permissions = template(rules)

        assert permissions() == rules

        permix = Permix()
        permix.setup(permissions())
        assert permix.check("post", "create") is True

    def test_producer_passed_to_setup(self):
        """The producer itself is an acceptable setup argument."""
        permissions = template({"post": {"create": True}})
        permix = Permix()

        permix.setup(permissions)

        assert permix.check("post", "create") is True

    @pytest.mark.parametrize("value", [1, "string", [], {}, None])
    def test_invalid_template_raises_immediately(self, value):
        """Invalid leaves are rejected at definition time."""
        with pytest.raises(InvalidRulesError, match="template"):
            template({"post": {"create": value}})

    def test_parameterized_template(self):
        """A rule-building function becomes a one-argument producer."""
        by_role = template(lambda ctx: {
            "post": {"create": ctx["user"]["role"] != "admin", "read": True},
            "comment": {"create": ctx["user"]["role"] != "admin", "read": True},
        })
        permix = Permix()

        permix.setup(by_role({"user": {"role": "admin"}}))
        assert permix.check("post", "create") is False

        permix.setup(by_role({"user": {"role": "editor"}}))
        assert permix.check("post", "create") is True

    def test_parameterized_template_validates_each_result(self):
        """Invalid output is caught when the producer is called."""
        broken = template(lambda flag: {"post": {"create": flag}})

        assert broken(True) == {"post": {"create": True}}
        with pytest.raises(InvalidRulesError):
            broken("yes")

    def test_template_keeps_predicates(self):
        """Predicates survive templating and evaluate on check."""
        owner_only = template({"post": {"edit": lambda post: post["author_id"] == "1"}})
        permix = Permix()

        permix.setup(owner_only())

        assert permix.check("post", "edit", {"author_id": "1"}) is True
        assert permix.check("post", "edit", {"author_id": "2"}) is False

    def test_instance_template(self):
        """Instances expose the same helper."""
        permix = Permix()

        permissions = permix.template({"post": {"create": True}})
        permix.setup(permissions())

        assert permix.check("post", "create") is True

        with pytest.raises(InvalidRulesError):
            permix.template({"post": {"create": 1}})

    def test_templator(self):
        """templator hands back the template function."""
        build = templator()

        assert build is template
        assert build({"post": {"read": True}})() == {"post": {"read": True}}
