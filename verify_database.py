import asyncio
import sys

from sqlalchemy import text

from tracker.app.core.config import settings
from tracker.app.core.observability import configure_logging
from tracker.app.db.session import build_engine, init_models

# Uses DATABASE_URL from the environment or .env (via pydantic settings)
print(f"Testing connection to: {settings.database_url}")

async def check_db():
    configure_logging(settings.log_level)
    engine = build_engine(settings.database_url, echo=settings.db_echo)
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        print("✅ Connection Successful!")
        await init_models(engine)
        print("✅ Parcel table ready")
        return 0
    except Exception as e:
        print(f"❌ Connection Failed: {e}")
        return 1
    finally:
        await engine.dispose()

if __name__ == "__main__":
    sys.exit(asyncio.run(check_db()))
