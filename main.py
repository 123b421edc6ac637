import uvicorn

from sales_api.config.settings import settings

if __name__ == "__main__":
    uvicorn.run(
        "sales_api.api.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG
    )
