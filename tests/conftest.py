import pytest

from ndf.errors import SourceUnavailable
from ndf.rules import ExclusionRules


@pytest.fixture
def linux_rules():
    return ExclusionRules.for_platform("linux")


@pytest.fixture
def unavailable():
    return SourceUnavailable("mount table unreadable")
