"""Health check router."""

import logging
from pathlib import Path
from typing import Optional

from alembic.config import Config
from alembic.script import ScriptDirectory
from fastapi import APIRouter, Depends
from sqlalchemy import func, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.db.session import get_db
from app.models import PipelineStage

logger = logging.getLogger(__name__)

router = APIRouter()


def _load_alembic_head() -> Optional[str]:
    project_root = Path(__file__).resolve().parents[2]
    cfg_path = project_root / "alembic.ini"
    script_location = project_root / "alembic"
    if not cfg_path.exists() or not script_location.exists():
        return None

    config = Config(str(cfg_path))
    config.set_main_option("script_location", str(script_location))
    return ScriptDirectory.from_config(config).get_current_head()


@router.get("/health")
async def health_check(db: AsyncSession = Depends(get_db)):
    """Report API, database and migration state for the analytics service."""

    db_ok = False
    alembic_current: Optional[str] = None
    alembic_head: Optional[str] = None

    try:
        await db.execute(text("SELECT 1"))
        db_ok = True
    except Exception:  # noqa: BLE001
        logger.warning("Health check: database unreachable", exc_info=True)

    if db_ok:
        try:
            version_result = await db.execute(text("SELECT version_num FROM alembic_version"))
            alembic_current = version_result.scalar_one_or_none()
        except Exception:  # noqa: BLE001
            logger.warning("Health check: alembic_version table missing", exc_info=True)

    try:
        alembic_head = _load_alembic_head()
    except Exception:  # noqa: BLE001
        logger.warning("Health check: could not load alembic head", exc_info=True)

    alembic_head_ok = bool(alembic_current and alembic_head and alembic_current == alembic_head)

    # Without a hire stage every report shows zero hires
    hire_stages: Optional[int] = None
    if alembic_head_ok:
        hire_stages = (
            await db.execute(
                select(func.count()).select_from(PipelineStage).where(PipelineStage.is_terminal_hire_stage.is_(True))
            )
        ).scalar_one()
        if not hire_stages:
            logger.warning("Health check: no pipeline stage is flagged as a hire stage")

    return {
        "app": settings.APP_NAME,
        "api_ok": True,
        "db_ok": db_ok,
        "alembic_head_ok": alembic_head_ok,
        "hire_stages_configured": hire_stages,
        "alembic_current": alembic_current,
        "alembic_head": alembic_head,
    }
