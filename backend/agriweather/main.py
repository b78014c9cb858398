import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from agriweather.core.errors import AgriWeatherError
from agriweather.core.logger import logs
from agriweather.routes.weather_route import router as weather_router
from agriweather.routes.geocode_route import router as geocode_router
from agriweather.routes.alerts_route import router as alerts_router

app = FastAPI(title="AgriWeather Advisory Backend")
app.include_router(weather_router)
app.include_router(geocode_router)
app.include_router(alerts_router)

# --- Error Rendering ---
@app.exception_handler(AgriWeatherError)
async def agriweather_error_handler(request: Request, exc: AgriWeatherError):
    if exc.status_code >= 500:
        # Detail stays in the logs; clients get the generic message
        logs.log(logging.ERROR, f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.default_message})
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": "Invalid request body or parameters"})

# --- Root Endpoint ---
@app.get("/")
async def root():
    return {
        "message": "Welcome to AgriWeather Advisory API",
        "status": "running",
        "endpoints": {
            "health": "/health",
            "weather": "/weather",
            "sources": "/weather/sources",
            "geocode": "/geocode",
            "alerts": "/alerts",
            "docs": "/docs"
        },
        "version": "1.0.0"
    }

# --- Health Check ---
@app.get("/health")
async def health_check():
    return {"status": "ok", "service": "AgriWeather Advisory Backend"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("agriweather.main:app", host="0.0.0.0", port=8000, reload=True)
