import pytest

from raftkit.state import StateType


@pytest.mark.parametrize(
    "state, name",
    [
        (StateType.PROBE, "StateProbe"),
        (StateType.REPLICATE, "StateReplicate"),
        (StateType.SNAPSHOT, "StateSnapshot"),
    ],
)
def test_str(state, name):
    assert str(state) == name
    assert f"{state}" == name


def test_values_follow_declaration_order():
    assert [StateType(value) for value in range(3)] == [
        StateType.PROBE,
        StateType.REPLICATE,
        StateType.SNAPSHOT,
    ]


def test_round_trip_from_value():
    for state in StateType:
        assert StateType(int(state)) is state


def test_unknown_value_rejected():
    with pytest.raises(ValueError):
        StateType(len(StateType))