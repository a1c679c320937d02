# services/alarm_service/main.py

from fastapi import FastAPI, HTTPException
from prometheus_fastapi_instrumentator import Instrumentator

from utils.logging import setup_logging
from config import settings
from storage import SourceDataError, init_data, is_ready
from routers import alarms as alarms_router


# --- Логирование ---
logger = setup_logging()

# --- Приложение FastAPI ---
app = FastAPI(
    title=settings.SERVICE_NAME,
    version=settings.VERSION,
    description=(
        "Alarm Service — справочник аварий, журнал аварийных событий "
        "и статистика по нему (активации по авариям и станциям, текущий статус)."
    ),
)

# --- Метрики Prometheus ---
Instrumentator().instrument(app).expose(app, include_in_schema=False)


# --- События приложения ---
@app.on_event("startup")
def startup_event():
    """
    Загружает alarms.json и alarmlog.json один раз при старте.
    Ошибка чтения или формата исходных данных останавливает сервис.
    """
    try:
        init_data()
    except SourceDataError as e:
        logger.critical(f"❌ Failed to load alarm data: {e}")
        raise
    logger.info(
        f"🚨 alarm_service started (paging_mode={settings.PAGING_COUNT_MODE}, "
        f"excluded_classes={sorted(settings.excluded_alarm_classes)})"
    )


# --- Health & readiness ---
@app.get("/health", tags=["system"])
async def health():
    return {"status": "ok", "service": "alarm_service"}


@app.get("/ready", tags=["system"])
async def ready():
    if not is_ready():
        raise HTTPException(status_code=503, detail="Alarm data is not loaded")
    return {"status": "ready"}


@app.get("/", include_in_schema=False)
async def root():
    return {"message": "Alarm Service is operational"}


# --- Подключаем роутер доменной логики ---
app.include_router(alarms_router.router)
