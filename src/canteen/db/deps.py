from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from canteen.db.session import AsyncSessionLocal


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Use as Depends(get_async_session)
    Example: async def endpoint(db: AsyncSession = Depends(get_async_session))
    """
    async with AsyncSessionLocal() as session:
        yield session
