"""Shared fixtures for hierarchy normalization tests."""

import numpy as np
import pandas as pd
import pytest

from hiervis.contingency import DimensionTable


@pytest.fixture
def titanic_class_sex():
    """Titanic passengers by Class x Sex (2201 people)."""
    return DimensionTable.from_levels(
        {"Class": ["1st", "2nd", "3rd", "Crew"], "Sex": ["Male", "Female"]},
        np.array([[180, 145], [179, 106], [510, 196], [862, 23]]),
    )


@pytest.fixture
def titanic_frame():
    """Long layout of Class x Sex x Survived, with one zero cell."""
    rows = [
        ("1st", "Male", "No", 118), ("1st", "Male", "Yes", 62),
        ("1st", "Female", "No", 4), ("1st", "Female", "Yes", 141),
        ("Crew", "Male", "No", 670), ("Crew", "Male", "Yes", 192),
        ("Crew", "Female", "No", 3), ("Crew", "Female", "Yes", 20),
        ("2nd", "Female", "No", 0), ("2nd", "Female", "Yes", 13),
    ]
    return pd.DataFrame(rows, columns=["Class", "Sex", "Survived", "Freq"])


@pytest.fixture
def module_paths():
    """d3-style module sizes keyed by slash-delimited path."""
    return pd.DataFrame(
        {
            "path": [
                "d3/d3-array/src/bisect.js",
                "d3/d3-array/src/sum.js",
                "d3/d3-array/index.js",
                "d3/d3-scale/src/linear.js",
                "d3/d3-scale/src/band.js",
                "d3/index.js",
            ],
            "size": [120, 40, 10, 300, 210, 25],
        }
    )


@pytest.fixture
def parent_child_frame():
    return pd.DataFrame(
        {
            "name": ["Root Node", "Node A", "Node B", "Leaf Node A.1", "Leaf Node A.2"],
            "parent": [None, "Root Node", "Root Node", "Node A", "Node A"],
        }
    )
