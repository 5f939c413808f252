import pytest

from lpmath.config import settings
from lpmath.exceptions import (
    EVMRevertError,
    InvalidRange,
    InvalidTickSpacing,
    NegativeAmount,
    TickOutOfBounds,
)
from lpmath.types.concrete import AbstractPublisherMessage, Publisher
from lpmath.uniswap.v3_functions import get_optimal_liquidity, get_position_key
from lpmath.uniswap.v3_libraries.liquidity_amounts import get_liquidity_for_amounts
from lpmath.uniswap.v3_libraries.tick_math import MIN_TICK, get_sqrt_ratio_at_tick
from lpmath.uniswap.v3_position import UniswapV3PositionPlanner
from lpmath.uniswap.v3_types import TickRange, UniswapV3PositionPlanned

OWNER = "0xC36442b4a4522E871399CD717aBDD847Ab11FE88"
DESIRED_AMOUNT = 10_000_000_000_000_000


class RecordingSubscriber:
    def __init__(self) -> None:
        self.messages: list[tuple[Publisher, AbstractPublisherMessage]] = []

    def notify(self, publisher: Publisher, message: AbstractPublisherMessage) -> None:
        self.messages.append((publisher, message))


@pytest.fixture
def subscriber() -> RecordingSubscriber:
    return RecordingSubscriber()


def test_plan_snaps_range_and_sizes_liquidity(
    monkeypatch: pytest.MonkeyPatch, subscriber: RecordingSubscriber
):
    monkeypatch.setattr(settings.liquidity, "protocol_exact", False)

    planner = UniswapV3PositionPlanner(tick_spacing=60, subscribers=[subscriber])
    assert planner.protocol_exact is False

    sqrt_price_x96 = get_sqrt_ratio_at_tick(0)
    plan = planner.plan(
        owner=OWNER.lower(),
        tick_lower=-301,
        tick_upper=301,
        amount0_desired=DESIRED_AMOUNT,
        amount1_desired=DESIRED_AMOUNT,
        sqrt_price_x96=sqrt_price_x96,
    )

    assert plan.owner == OWNER
    assert plan.tick_range == TickRange(lower=-360, upper=300)
    assert plan.tick_spacing == 60
    assert plan.sqrt_price_x96 == sqrt_price_x96
    assert plan.sqrt_price_lower_x96 == get_sqrt_ratio_at_tick(-360)
    assert plan.sqrt_price_upper_x96 == get_sqrt_ratio_at_tick(300)
    assert plan.liquidity == get_optimal_liquidity(
        DESIRED_AMOUNT, DESIRED_AMOUNT, sqrt_price_x96, TickRange(lower=-360, upper=300)
    )
    assert 0 < plan.amount0 <= DESIRED_AMOUNT
    assert 0 < plan.amount1 <= DESIRED_AMOUNT
    assert plan.position_key == get_position_key(OWNER, -360, 300)

    assert len(subscriber.messages) == 1
    publisher, message = subscriber.messages[0]
    assert publisher is planner
    assert isinstance(message, UniswapV3PositionPlanned)
    assert message.plan == plan
    assert message.amount0_desired == DESIRED_AMOUNT
    assert message.amount1_desired == DESIRED_AMOUNT


def test_plan_with_protocol_exact_liquidity():
    planner = UniswapV3PositionPlanner(tick_spacing=60, protocol_exact=True)

    # Price below the range, so the position holds only token0
    sqrt_price_x96 = get_sqrt_ratio_at_tick(-600)
    plan = planner.plan(
        owner=OWNER,
        tick_lower=-300,
        tick_upper=300,
        amount0_desired=DESIRED_AMOUNT,
        amount1_desired=DESIRED_AMOUNT,
        sqrt_price_x96=sqrt_price_x96,
    )

    assert plan.liquidity == get_liquidity_for_amounts(
        sqrt_price_x96,
        get_sqrt_ratio_at_tick(-300),
        get_sqrt_ratio_at_tick(300),
        DESIRED_AMOUNT,
        DESIRED_AMOUNT,
    )
    assert 0 < plan.amount0 <= DESIRED_AMOUNT
    assert plan.amount1 == 0


def test_plan_without_token0_for_range_spanning_price():
    sqrt_price_x96 = get_sqrt_ratio_at_tick(0)

    exact_plan = UniswapV3PositionPlanner(tick_spacing=60, protocol_exact=True).plan(
        OWNER, -300, 300, 0, DESIRED_AMOUNT, sqrt_price_x96
    )
    default_plan = UniswapV3PositionPlanner(tick_spacing=60, protocol_exact=False).plan(
        OWNER, -300, 300, 0, DESIRED_AMOUNT, sqrt_price_x96
    )

    # Without token0 neither mode can add liquidity to a range that spans the price
    assert exact_plan.liquidity == 0
    assert default_plan.liquidity == 0


def test_unsubscribed_subscriber_is_not_notified(subscriber: RecordingSubscriber):
    planner = UniswapV3PositionPlanner(tick_spacing=60, protocol_exact=False)
    planner.subscribe(subscriber)
    planner.unsubscribe(subscriber)

    planner.plan(OWNER, -300, 300, DESIRED_AMOUNT, DESIRED_AMOUNT, get_sqrt_ratio_at_tick(0))
    assert subscriber.messages == []


def test_plan_rejects_bad_inputs():
    with pytest.raises(InvalidTickSpacing):
        UniswapV3PositionPlanner(tick_spacing=0)

    planner = UniswapV3PositionPlanner(tick_spacing=60, protocol_exact=False)
    sqrt_price_x96 = get_sqrt_ratio_at_tick(0)

    with pytest.raises(NegativeAmount):
        planner.plan(OWNER, -300, 300, -1, DESIRED_AMOUNT, sqrt_price_x96)

    with pytest.raises(NegativeAmount):
        planner.plan(OWNER, -300, 300, DESIRED_AMOUNT, -1, sqrt_price_x96)

    with pytest.raises(InvalidRange):
        planner.plan(OWNER, 0, 59, DESIRED_AMOUNT, DESIRED_AMOUNT, sqrt_price_x96)

    with pytest.raises(InvalidRange):
        planner.plan(OWNER, -300, -300, DESIRED_AMOUNT, DESIRED_AMOUNT, sqrt_price_x96)

    with pytest.raises(TickOutOfBounds):
        planner.plan(OWNER, MIN_TICK, 0, DESIRED_AMOUNT, DESIRED_AMOUNT, sqrt_price_x96)


def test_planner_with_unconfigured_spacing_still_plans():
    planner = UniswapV3PositionPlanner(tick_spacing=7, protocol_exact=False)
    plan = planner.plan(
        OWNER, -300, 300, DESIRED_AMOUNT, DESIRED_AMOUNT, get_sqrt_ratio_at_tick(0)
    )
    assert plan.tick_range == TickRange(lower=-301, upper=294)


def test_plan_with_oversized_non_binding_amount():
    planner = UniswapV3PositionPlanner(tick_spacing=1, protocol_exact=False)
    sqrt_price_x96 = get_sqrt_ratio_at_tick(-200_000)

    plan = planner.plan(OWNER, -200_000, -199_999, 10**18, 10**31, sqrt_price_x96)

    assert plan.liquidity == get_optimal_liquidity(
        10**18, 10**31, sqrt_price_x96, TickRange(lower=-200_000, upper=-199_999)
    )
    assert 0 < plan.amount0 <= 10**18
    assert 0 < plan.amount1 <= 10**31


def test_plan_rejects_liquidity_above_uint128():
    planner = UniswapV3PositionPlanner(tick_spacing=60, protocol_exact=False)
    with pytest.raises(EVMRevertError):
        planner.plan(OWNER, -300, 300, 2**200, 2**200, get_sqrt_ratio_at_tick(0))
