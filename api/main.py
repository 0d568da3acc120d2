"""
FastAPI REST API for the Rockfall Risk Monitor

Provides RESTful endpoints for rockfall risk assessment and the simulated
mine telemetry behind the dashboard.
"""

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Dict
from datetime import datetime
import logging

from rockfall import config
from rockfall.alerts import alert_banner, recommendation
from rockfall.exceptions import InvalidInputError, UnknownMineError
from rockfall.mines import get_mine, search_mines
from rockfall.risk_scoring import Reading, RiskScorer, SelectionScorer, summarize_assessments
from rockfall.simulation import (
    data_source_summary,
    default_data_sources,
    elevation_profile,
    forecast_summary,
    make_rng,
    probability_forecast,
    profile_summary,
    risk_zone_grid,
    simulate_mine_reading,
    tick_data_sources,
    zone_counts,
)

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Rockfall Risk Monitor API",
    description="Rockfall risk assessment from simulated mine telemetry",
    version="1.0.0"
)

# Enable CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

risk_scorer = RiskScorer(config.FACTOR_WEIGHTS)
selection_scorer = SelectionScorer(scorer=risk_scorer)

LEVEL_PATTERN = "^(High|Medium|Low|Safe)$"


# Pydantic models
class ReadingInput(BaseModel):
    slope: float = Field(..., ge=0, le=90, description="Slope angle in degrees (0 to 90)")
    vibration: float = Field(..., ge=0, description="Vibration frequency units")
    rainfall: float = Field(..., ge=0, description="Rainfall in mm/h")
    temperature: float = Field(..., description="Temperature in degrees C")


class RiskFactorsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    slope_instability: int = Field(..., alias="slopeInstability")
    vibration_patterns: int = Field(..., alias="vibrationPatterns")
    weather_conditions: int = Field(..., alias="weatherConditions")


class RiskResponse(BaseModel):
    probability: int
    level: str
    factors: RiskFactorsResponse


class BatchInput(BaseModel):
    readings: List[ReadingInput]


class BatchResponse(BaseModel):
    total_readings: int
    average_probability: float
    risk_distribution: Dict[str, int]
    highest_risk_readings: List[Dict]
    timestamp: datetime


def _assess(reading: ReadingInput):
    return risk_scorer.assess(Reading(**reading.model_dump()))


def _mine_or_404(mine_id: str):
    try:
        return get_mine(mine_id)
    except UnknownMineError as e:
        raise HTTPException(status_code=404, detail=str(e))


# API Endpoints

@app.get("/")
async def root():
    """API root endpoint"""
    return {
        "message": "Rockfall Risk Monitor API",
        "version": "1.0.0",
        "endpoints": {
            "health": "/health",
            "risk_assessment": "/api/v1/risk/assess",
            "batch_assessment": "/api/v1/risk/batch",
            "mines": "/api/v1/mines",
            "mine_selection": "/api/v1/mines/{mine_id}/select",
            "elevation": "/api/v1/mines/{mine_id}/elevation",
            "forecast": "/api/v1/mines/{mine_id}/forecast",
            "risk_zones": "/api/v1/mines/{mine_id}/risk-zones",
            "data_sources": "/api/v1/data-sources"
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "services": {
            "risk_scorer": "operational",
            "selection_formula": selection_scorer.formula
        }
    }


@app.post("/api/v1/risk/assess", response_model=RiskResponse)
async def assess_reading(reading: ReadingInput):
    """
    Assess rockfall risk for a single sensor reading

    Returns the risk probability, band and contributing factor scores.
    """
    try:
        return _assess(reading).to_dict()
    except InvalidInputError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error(f"Error assessing reading: {e}")
        raise HTTPException(status_code=500, detail=f"Error assessing risk: {str(e)}")


@app.post("/api/v1/risk/batch", response_model=BatchResponse)
async def assess_batch(batch: BatchInput):
    """
    Assess a batch of readings

    Returns aggregate metrics and the highest-risk readings.
    """
    try:
        if not batch.readings:
            raise HTTPException(status_code=400, detail="No readings provided")

        assessments = [_assess(reading) for reading in batch.readings]
        summary = summarize_assessments(assessments, top=5)

        highest_risk = [
            {
                "index": i,
                "reading": batch.readings[i].model_dump(),
                "probability": assessments[i].probability,
                "level": assessments[i].level
            }
            for i in summary["highest_risk"]
        ]

        return BatchResponse(
            total_readings=summary["count"],
            average_probability=summary["average_probability"],
            risk_distribution=summary["risk_distribution"],
            highest_risk_readings=highest_risk,
            timestamp=datetime.now()
        )

    except HTTPException:
        raise
    except InvalidInputError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error(f"Error assessing batch: {e}")
        raise HTTPException(status_code=500, detail=f"Error assessing batch: {str(e)}")


@app.get("/api/v1/mines")
async def list_mines(q: Optional[str] = Query(None, max_length=100)):
    """Search the mine catalogue by name, location or type"""
    mines = search_mines(q)
    return {
        "count": len(mines),
        "mines": [mine.to_dict() for mine in mines]
    }


@app.post("/api/v1/mines/{mine_id}/select")
async def select_mine(mine_id: str, seed: Optional[int] = Query(None, ge=0)):
    """
    Simulate selecting a mine on the dashboard

    Returns the simulated reading, its assessment and the alert to display.
    """
    mine = _mine_or_404(mine_id)
    try:
        location = simulate_mine_reading(mine, make_rng(seed))
        assessment = selection_scorer.assess(location.reading, mine.status)

        return {
            "mine": mine.to_dict(),
            "location": location.to_dict(),
            "assessment": assessment.to_dict(),
            "recommendation": recommendation(assessment.level),
            "show_alert": assessment.level == "High",
            "alert": alert_banner(assessment.level)
        }
    except Exception as e:
        logger.error(f"Error selecting mine {mine_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/api/v1/mines/{mine_id}/elevation")
async def get_elevation(
    mine_id: str,
    points: int = Query(50, ge=2, le=500),
    seed: Optional[int] = Query(None, ge=0)
):
    """Get the elevation profile for a mine"""
    mine = _mine_or_404(mine_id)
    try:
        profile = elevation_profile(make_rng(seed), points=points)
        return {
            "mine": mine.name,
            "summary": profile_summary(profile),
            "profile": profile.to_dict(orient="records")
        }
    except Exception as e:
        logger.error(f"Error building elevation profile: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/api/v1/mines/{mine_id}/forecast")
async def get_forecast(
    mine_id: str,
    current_level: str = Query("Low", pattern=LEVEL_PATTERN),
    time_range: str = Query("24h", pattern="^(24h|7d|30d)$"),
    seed: Optional[int] = Query(None, ge=0)
):
    """Get the probability forecast for a mine"""
    mine = _mine_or_404(mine_id)
    try:
        forecast = probability_forecast(current_level, time_range, make_rng(seed))
        forecast["timestamp"] = forecast["timestamp"].apply(lambda t: t.isoformat())
        return {
            "mine": mine.name,
            "time_range": time_range,
            "summary": forecast_summary(forecast),
            "points": forecast.to_dict(orient="records")
        }
    except Exception as e:
        logger.error(f"Error building forecast: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/api/v1/mines/{mine_id}/risk-zones")
async def get_risk_zones(mine_id: str, seed: Optional[int] = Query(None, ge=0)):
    """Get the risk-zone grid for a mine"""
    mine = _mine_or_404(mine_id)
    zones = risk_zone_grid(make_rng(seed))
    return {
        "mine": mine.name,
        "counts": zone_counts(zones),
        "zones": [zone.to_dict() for zone in zones]
    }


@app.get("/api/v1/data-sources")
async def get_data_sources(
    ticks: int = Query(0, ge=0, le=100),
    seed: Optional[int] = Query(None, ge=0)
):
    """Get monitoring data sources, optionally advanced by simulated refreshes"""
    sources = default_data_sources()
    rng = make_rng(seed)
    for _ in range(ticks):
        sources = tick_data_sources(sources, rng)

    return {
        "summary": data_source_summary(sources),
        "sources": [source.to_dict() for source in sources]
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.API_HOST, port=config.API_PORT)
