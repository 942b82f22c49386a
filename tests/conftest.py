"""Shared fixtures for forcegraph tests."""

import pytest

from forcegraph.config import GraphConfig
from forcegraph.model import FieldInfo, QueryFields

from sample_rows import make_row


@pytest.fixture
def fields():
    """Four dimensions and one measure with labels and a value format."""
    return QueryFields(
        dimensions=[
            FieldInfo('src', label='Source Person', label_short='Person'),
            FieldInfo('src_group', label='Source Team', label_short='Team'),
            FieldInfo('tgt', label='Target Person'),
            FieldInfo('tgt_group', label='Target Team'),
        ],
        measures=[FieldInfo('weight', label='Messages', value_format='#,##0.00')],
    )


@pytest.fixture
def chain_rows():
    """A-B, B-C in one component and D-E in another."""
    return [
        make_row('A', 'G1', 'B', 'G2'),
        make_row('B', 'G2', 'C', 'G3'),
        make_row('D', 'G1', 'E', 'G3'),
    ]


@pytest.fixture
def config():
    return GraphConfig()
