import matplotlib

matplotlib.use("Agg")

import pytest

from config import get_config
from core.field import GridData
from physics.charges import ChargeSource
from physics.trajectories import static


@pytest.fixture
def params():
    p = get_config()
    p.update({
        'quiet_mode': True,
        'render_mode': 'none',
        'enable_export': False,
        'backend': 'cpu',
        'coulomb_convention': 'standard',
        'singularity_policy': 'zero',
        'derivative_method': 'analytic',
    })
    return p


@pytest.fixture
def small_grid():
    return GridData(-2.0, 2.0, 0.5, -1.5, 1.5, 0.5)


@pytest.fixture
def unit_charge_at_origin():
    return ChargeSource(static(0.0, 0.0), 1.0, '+q')
