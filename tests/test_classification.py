import numpy as np
import pandas as pd
import pytest

from conic.core.classification import SBT_ZONE_NAMES, add_sbt_zones, sbt_zone


@pytest.mark.parametrize("ic,zone", [
    (1.0, 7),
    (1.31, 6),
    (2.0, 6),
    (2.05, 5),
    (2.59, 5),
    (2.60, 4),
    (2.95, 3),
    (3.60, 3),
    (3.61, 2),
    (float("inf"), 2),
    (float("nan"), 0),
])
def test_sbt_zone_boundaries(ic, zone):
    assert sbt_zone(ic) == zone


def test_every_zone_has_a_name():
    for zone in [0, 2, 3, 4, 5, 6, 7]:
        assert zone in SBT_ZONE_NAMES


def test_add_sbt_zones_column():
    table = pd.DataFrame({"Ic": [1.2, 2.3, np.nan, 3.1]})
    out = add_sbt_zones(table)
    assert out["SBT zone"].tolist() == [7, 5, 0, 3]
    assert "SBT zone" not in table.columns
