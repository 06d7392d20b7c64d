from __future__ import annotations

"""Preflight checks for container startup.

- validates planner settings (import of config fails fast)
- prints config summary
"""

from waypoint_router.config import settings


def main():
    # Mask credentials in DATABASE_URL
    db_url = settings.database_url
    if "@" in db_url:
        # Hide password: show scheme + host only
        parts = db_url.split("@")
        db_url = parts[0].split("://")[0] + "://***@" + parts[-1]
    print("Preflight OK")
    print(f"DATABASE_URL={db_url}")
    print(f"CORS_ORIGINS={settings.cors_origins}")
    print(f"GRID_STEP={settings.grid_step} GRID_MAX_EXPANSIONS={settings.grid_max_expansions}")
    print(
        f"VIRTUAL_POINT_MARGIN={settings.virtual_point_margin} "
        f"VIRTUAL_POINT_ANGLE_STEP_DEG={settings.virtual_point_angle_step_deg} "
        f"MAX_VIRTUAL_POINTS={settings.max_virtual_points}"
    )


if __name__ == "__main__":
    main()
