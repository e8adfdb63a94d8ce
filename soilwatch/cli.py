"""
Sensor provisioning utility

Usage:
    soilwatch-admin provision --name "Greenhouse 3" --location "North bed"
    soilwatch-admin unclaimed
    python -m soilwatch.cli provision --name "Field A" --location "Plot 7"
"""
import argparse
import asyncio
import sys

from sqlalchemy import select

from .core.config import settings
from .core.database import AsyncSessionLocal, close_db, init_db
from .exceptions import SoilWatchException
from .logging_config import configure_logging
from .models import Sensor
from .services import SensorService


async def provision_sensor(name: str, location: str):
    """Create an unowned sensor and print its webhook token"""
    await init_db()
    try:
        async with AsyncSessionLocal() as session:
            sensor = await SensorService(session).provision(name, location)

        print(f"\n{'='*60}")
        print(f"Sensor Provisioned")
        print(f"{'='*60}")
        print(f"ID:          {sensor.id}")
        print(f"Name:        {sensor.sensor_name}")
        print(f"Location:    {sensor.location}")
        print(f"Installed:   {sensor.installed_at}")
        print(f"\n{'='*60}")
        print(f"WEBHOOK TOKEN (configure the device with this):")
        print(f"{'='*60}")
        print(f"{sensor.webhook_token}")
        print(f"{'='*60}\n")

        print("Usage:")
        print(f"  POST /webhook/sensors/data?token={sensor.webhook_token}")
        print(f"  PATCH /sensors/{sensor.id}/assign  (to claim it)\n")
    finally:
        await close_db()


async def list_unclaimed():
    """List sensors nobody has claimed yet"""
    try:
        async with AsyncSessionLocal() as session:
            result = await session.execute(
                select(Sensor).where(Sensor.user_id.is_(None)).order_by(Sensor.id)
            )
            sensors = result.scalars().all()

        print(f"\n{'='*80}")
        print(f"Unclaimed Sensors")
        print(f"{'='*80}")
        print(f"{'ID':<8} {'Name':<30} {'Location':<25} {'Installed':<17}")
        print(f"{'-'*80}")

        for sensor in sensors:
            installed = sensor.installed_at.strftime('%Y-%m-%d %H:%M') if sensor.installed_at else '-'
            print(f"{sensor.id:<8} {sensor.sensor_name:<30} {sensor.location:<25} {installed:<17}")

        print(f"{'='*80}\n")
        print(f"Total: {len(sensors)} sensors\n")
    finally:
        await close_db()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Manage SoilWatch sensors")
    subparsers = parser.add_subparsers(dest='command', help='Command to execute')

    provision_parser = subparsers.add_parser('provision', help='Create an unowned sensor')
    provision_parser.add_argument('--name', required=True, help='Sensor name')
    provision_parser.add_argument('--location', required=True, help='Where the sensor is installed')

    subparsers.add_parser('unclaimed', help='List sensors without an owner')

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    configure_logging(log_level=settings.log_level, json_logs=settings.json_logs)

    try:
        if args.command == 'provision':
            asyncio.run(provision_sensor(args.name, args.location))
        elif args.command == 'unclaimed':
            asyncio.run(list_unclaimed())
    except SoilWatchException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
