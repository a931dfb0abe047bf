import random
from dataclasses import replace

import pytest

from beamdrill.services.generation import GenerationContext
from beamdrill.services.pools import DEFAULT_CANDIDATES, build_pools, get_pools

# Candidate sets that filter down to nothing, so every pool that does not
# derive from another one falls back to its safe tuple.
DEGENERATE_CANDIDATES = replace(
    DEFAULT_CANDIDATES,
    rect_b=(7,), rect_h=(11,),
    hollow_outer_b=(50,), hollow_outer_h=(50,),
    h_h=(20,),
    t_b=(5,),
    l_b1=(7,), l_h=(13,), l_b2=(9,), l_t=(3,),
    bending_cantilever_l=(3,), bending_simple_l=(5,), bending_p=(7,),
    column_h=(7,),
    shear_q=(7,),
    frame_l=(3,), frame_h=(1,), frame_p=(1,), frame_w=(1,),
)


@pytest.fixture
def rng():
    """Seeded random source so failures are reproducible."""
    return random.Random(20240521)


@pytest.fixture(scope="session")
def pools():
    return get_pools()


@pytest.fixture(scope="session")
def degenerate_pools():
    return build_pools(DEGENERATE_CANDIDATES)


@pytest.fixture
def ctx(rng, pools):
    return GenerationContext(rng=rng, pools=pools)

