import pytest

from spocklink.models import DecodeError, Mission, Pet, Villain


def test_pet_wire_layout():
    assert Pet("Babu", True, 5).to_bytes() == b"\x05\x01Babu\x00"


def test_pet_round_trip_reports_consumed_size():
    pet = Pet("Babu", True, 5)
    data = pet.to_bytes()
    decoded, used = Pet.from_bytes(data + b"trailing")
    assert decoded == pet
    assert used == len(data)


def test_pet_negative_age_and_false_flag_round_trip():
    pet = Pet("Rex", False, -3)
    decoded, _ = Pet.from_bytes(pet.to_bytes())
    assert decoded == pet


def test_pet_age_out_of_range():
    with pytest.raises(ValueError):
        Pet("Babu", True, 300)


def test_pet_without_terminator_fails():
    with pytest.raises(DecodeError):
        Pet.from_bytes(b"\x05\x01Babu")


def test_pet_too_short_fails():
    with pytest.raises(DecodeError):
        Pet.from_bytes(b"\x05")


def test_mission_create_sets_length():
    mission = Mission.create("ABCDEFGHI")
    assert mission.info == "ABCDEFGHI"
    assert mission.length == len("ABCDEFGHI")


def test_mission_wire_layout():
    assert Mission.create("ABCDEFGHI").to_bytes() == b"ABCDEFGHI\x00\x09\x00\x00\x00"


def test_mission_round_trip():
    mission = Mission.create("ABCDEFGHI")
    data = mission.to_bytes()
    decoded, used = Mission.from_bytes(data + b"\xff\xff")
    assert decoded == mission
    assert used == len(data)


def test_mission_truncated_length_fails():
    with pytest.raises(DecodeError):
        Mission.from_bytes(b"ABC\x00\x03\x00")


def test_mission_rejects_nul():
    with pytest.raises(ValueError):
        Mission.create("AB\0C")


def test_villain_fixed_size_and_round_trip():
    villain = Villain.create("Borg Queen", 34)
    data = villain.to_bytes()
    assert len(data) == 27
    decoded, used = Villain.from_bytes(data)
    assert decoded == villain
    assert used == 27


@pytest.mark.parametrize("name,age", [("Locotus", 20), ("Dukat", 67)])
def test_villain_round_trip_cases(name, age):
    decoded, _ = Villain.from_bytes(Villain.create(name, age).to_bytes())
    assert (decoded.name, decoded.age) == (name, age)


def test_villain_name_truncated_to_24_bytes():
    villain = Villain.create("X" * 40, 1)
    assert villain.name == "X" * 24
    decoded, _ = Villain.from_bytes(villain.to_bytes())
    assert decoded.name == "X" * 24


def test_villain_age_out_of_range():
    with pytest.raises(ValueError):
        Villain.create("Dukat", 70000)


def test_villain_short_buffer_fails():
    with pytest.raises(DecodeError):
        Villain.from_bytes(b"Dukat\x00")