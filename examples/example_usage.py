"""Example: drive the service layer directly (no Flask).

Opens a session and marks one student present from the classroom location.
"""

import importlib

from dotenv import load_dotenv

from config import get_settings_module

from src.geofence_attendance.geofence_attendance.container import build_container


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, max_distance_meters=settings.MAX_DISTANCE_METERS)
    try:
        session = container.session_service.create_session(
            "Dr. A", "Physics", 12.9716, 77.5946, base_url="http://localhost:3000"
        )
        record = container.attendance_service.submit_attendance(session.code, "Bob", "cs101", 12.9716, 77.5946)
        print(session.code, session.link, record.roll_no, f"{record.distance_meters:.2f}m")
    finally:
        container.close()


if __name__ == "__main__":
    main()
