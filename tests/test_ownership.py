"""
Ownership guard tests

A foreign sensor and a missing sensor must be indistinguishable to the caller.
"""
import pytest

from soilwatch.exceptions import (
    AlertNotFoundError,
    ReadingNotFoundError,
    SensorNotFoundError,
)
from soilwatch.models import Alert, Reading
from soilwatch.services import OwnershipGuard


async def add_reading(session, sensor_id):
    reading = Reading(
        sensor_id=sensor_id,
        soil_humidity=40, temperature=24, condutivity=1.0, ph=6.5,
        nitrogen=35, phosphorus=25, potassium=200,
    )
    session.add(reading)
    await session.commit()
    return reading


async def add_alert(session, sensor_id):
    alert = Alert(sensor_id=sensor_id, message="manual", level="Alerta")
    session.add(alert)
    await session.commit()
    return alert


@pytest.mark.asyncio
async def test_resolves_own_sensor(db_session, make_user, make_sensor):
    alice = await make_user("Alice")
    sensor = await make_sensor(alice.id)

    resolved = await OwnershipGuard(db_session).resolve_owned_sensor(alice.id, sensor.id)

    assert resolved.id == sensor.id


@pytest.mark.asyncio
async def test_foreign_and_missing_sensor_look_the_same(db_session, make_user, make_sensor):
    alice = await make_user("Alice")
    bob = await make_user("Bob")
    bobs_sensor = await make_sensor(bob.id)
    guard = OwnershipGuard(db_session)

    with pytest.raises(SensorNotFoundError) as foreign:
        await guard.resolve_owned_sensor(alice.id, bobs_sensor.id)
    with pytest.raises(SensorNotFoundError) as missing:
        await guard.resolve_owned_sensor(alice.id, 9999)

    assert type(foreign.value) is type(missing.value)
    assert foreign.value.status_code == missing.value.status_code == 404
    assert foreign.value.message == missing.value.message
    assert foreign.value.error_code == missing.value.error_code


@pytest.mark.asyncio
async def test_unowned_sensor_is_not_resolvable(db_session, make_user, make_sensor):
    alice = await make_user()
    unowned = await make_sensor(None)

    with pytest.raises(SensorNotFoundError):
        await OwnershipGuard(db_session).resolve_owned_sensor(alice.id, unowned.id)


@pytest.mark.asyncio
async def test_reading_under_foreign_sensor_fails_on_sensor(db_session, make_user, make_sensor):
    alice = await make_user("Alice")
    bob = await make_user("Bob")
    bobs_sensor = await make_sensor(bob.id)
    reading = await add_reading(db_session, bobs_sensor.id)

    with pytest.raises(SensorNotFoundError):
        await OwnershipGuard(db_session).resolve_owned_reading(alice.id, bobs_sensor.id, reading.id)


@pytest.mark.asyncio
async def test_reading_must_belong_to_named_sensor(db_session, make_user, make_sensor):
    alice = await make_user()
    first = await make_sensor(alice.id)
    second = await make_sensor(alice.id)
    reading = await add_reading(db_session, second.id)
    guard = OwnershipGuard(db_session)

    with pytest.raises(ReadingNotFoundError):
        await guard.resolve_owned_reading(alice.id, first.id, reading.id)

    resolved = await guard.resolve_owned_reading(alice.id, second.id, reading.id)
    assert resolved.id == reading.id


@pytest.mark.asyncio
async def test_alert_resolution_follows_owner(db_session, make_user, make_sensor):
    alice = await make_user("Alice")
    bob = await make_user("Bob")
    alices_sensor = await make_sensor(alice.id)
    bobs_sensor = await make_sensor(bob.id)
    alert = await add_alert(db_session, bobs_sensor.id)
    guard = OwnershipGuard(db_session)

    with pytest.raises(AlertNotFoundError):
        await guard.resolve_owned_alert(alice.id, alert.id)

    assert (await guard.resolve_owned_alert(bob.id, alert.id)).id == alert.id

    # Right owner, wrong sensor
    with pytest.raises(AlertNotFoundError):
        await guard.resolve_owned_alert(bob.id, alert.id, sensor_id=alices_sensor.id)


@pytest.mark.asyncio
async def test_list_owned_sensors_only_returns_callers(db_session, make_user, make_sensor):
    alice = await make_user("Alice")
    bob = await make_user("Bob")
    a1 = await make_sensor(alice.id)
    await make_sensor(bob.id)
    a2 = await make_sensor(alice.id)
    await make_sensor(None)

    sensors = await OwnershipGuard(db_session).list_owned_sensors(alice.id)

    assert [s.id for s in sensors] == [a1.id, a2.id]
