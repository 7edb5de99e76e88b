"""Category classification rules for drifted attributes and resource types.

Classification is an ordered list of rules evaluated top to bottom; the
first matching rule wins and the default category applies when none
match.
"""

from __future__ import annotations

from collections.abc import Sequence

from drift_advisor.domain.models.base import ValueObject


class CategoryRule(ValueObject):
    """Maps names containing (or starting with) any keyword to a category."""

    category: str
    substrings: tuple[str, ...] = ()
    prefixes: tuple[str, ...] = ()
    case_sensitive: bool = True

    def matches(self, name: str) -> bool:
        candidate = name if self.case_sensitive else name.lower()
        if any(candidate.startswith(prefix) for prefix in self.prefixes):
            return True
        return any(keyword in candidate for keyword in self.substrings)


ATTRIBUTE_RULES: tuple[CategoryRule, ...] = (
    CategoryRule(
        category="security",
        substrings=("security", "iam", "policy"),
        case_sensitive=False,
    ),
    CategoryRule(
        category="networking",
        substrings=("network", "vpc", "subnet"),
        case_sensitive=False,
    ),
    CategoryRule(
        category="storage",
        substrings=("storage", "disk", "volume"),
        case_sensitive=False,
    ),
)
DEFAULT_ATTRIBUTE_CATEGORY = "configuration"

RESOURCE_TYPE_RULES: tuple[CategoryRule, ...] = (
    CategoryRule(category="compute", prefixes=("aws_instance", "aws_ec2")),
    CategoryRule(category="storage", prefixes=("aws_s3",), substrings=("storage",)),
    CategoryRule(category="networking", substrings=("vpc", "subnet", "security_group")),
    CategoryRule(category="security", substrings=("iam", "policy")),
)
DEFAULT_RESOURCE_TYPE_CATEGORY = "infrastructure"

UNKNOWN_RESOURCE_TYPE = "unknown"


def classify(name: str, rules: Sequence[CategoryRule], default: str) -> str:
    """Return the category of the first rule matching ``name``."""
    for rule in rules:
        if rule.matches(name):
            return rule.category
    return default


def categorize_attribute(attribute_name: str) -> str:
    return classify(attribute_name, ATTRIBUTE_RULES, DEFAULT_ATTRIBUTE_CATEGORY)


def categorize_resource_type(resource_type: str) -> str:
    return classify(resource_type, RESOURCE_TYPE_RULES, DEFAULT_RESOURCE_TYPE_CATEGORY)


def extract_resource_type(resource_id: str) -> str:
    """Terraform type of a resource address such as ``aws_instance.web``."""
    resource_type, separator, _ = resource_id.partition(".")
    if not separator:
        return UNKNOWN_RESOURCE_TYPE
    return resource_type
