from __future__ import annotations

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ------------------------------------------------------------
    # Server
    # ------------------------------------------------------------
    backend_host: str = "0.0.0.0"
    backend_port: int = 8080
    environment: str = "development"  # development | staging | production

    # ------------------------------------------------------------
    # Database (scene workspace)
    # ------------------------------------------------------------
    database_url: str = "sqlite:///./data/app.db"

    # ------------------------------------------------------------
    # CORS
    # ------------------------------------------------------------
    # Comma-separated origins, e.g.:
    # "http://localhost:3000,http://localhost:5173"
    cors_origins: str = "http://localhost:3000"

    # ------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------
    log_level: str = "INFO"

    # ------------------------------------------------------------
    # Grid A*
    # ------------------------------------------------------------
    grid_step: float = Field(40.0, description="Lattice spacing in scene units")
    # The lattice is unbounded; an enclosed goal would never drain the open set.
    # Also spent in full when a waypoint just outside a circle snaps to a
    # blocked lattice node: the frontier scan is linear, so one such leg at
    # 20000 costs seconds. Lower it for interactive use or raise GRID_STEP.
    grid_max_expansions: int = 20000

    # ------------------------------------------------------------
    # Visibility graph
    # ------------------------------------------------------------
    virtual_point_margin: float = 15.0
    virtual_point_angle_step_deg: float = 30.0
    # Graph build is O(P^2 * C); 100 obstacles at 12 samples each
    max_virtual_points: int = 1200

    # ------------------------------------------------------------
    # Scene defaults
    # ------------------------------------------------------------
    default_circle_radius: float = 100.0
    min_circle_radius: float = 50.0
    max_circle_radius: float = 150.0

    @property
    def cors_origins_list(self) -> List[str]:
        return [x.strip() for x in self.cors_origins.split(",") if x.strip()]

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    def validate_runtime(self) -> None:
        """Fail fast on planning settings that would make every query misbehave."""
        problems = []
        if self.grid_step <= 0:
            problems.append(f"GRID_STEP must be positive (got {self.grid_step})")
        if self.grid_max_expansions <= 0:
            problems.append(f"GRID_MAX_EXPANSIONS must be positive (got {self.grid_max_expansions})")
        if self.virtual_point_angle_step_deg <= 0:
            problems.append("VIRTUAL_POINT_ANGLE_STEP_DEG must be positive")
        if self.min_circle_radius >= self.max_circle_radius:
            problems.append("MIN_CIRCLE_RADIUS must be below MAX_CIRCLE_RADIUS")
        if problems:
            raise RuntimeError("Invalid planner configuration: " + "; ".join(problems))


settings = Settings()
settings.validate_runtime()
