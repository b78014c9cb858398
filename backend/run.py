#!/usr/bin/env python3
"""
AgriWeather Backend - Run Script
This script checks the local setup and starts the FastAPI backend server
"""

import os
import sys
import subprocess
import socket
from pathlib import Path

def print_colored(message, color="blue"):
    """Print colored output"""
    colors = {
        "red": "\033[91m",
        "green": "\033[92m",
        "yellow": "\033[93m",
        "blue": "\033[94m",
        "reset": "\033[0m"
    }
    print(f"{colors.get(color, '')}{message}{colors['reset']}")

def check_port_open(host, port):
    """Check if a port is open"""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.settimeout(2)
    result = sock.connect_ex((host, port))
    sock.close()
    return result == 0

def report_weather_sources():
    """Show which failover tiers will be active. Missing keys are allowed."""
    from agriweather.core.config import SourceConfig, settings
    from agriweather.services.Reliability_service import ReliabilityScorer

    config = SourceConfig.from_settings(settings)
    scorer = ReliabilityScorer()
    for status in scorer.source_statuses(config):
        mark = "✓" if status.configured else "✗"
        print(f"  {mark} {status.source_name} (reliability {status.reliability_score})")
    if not (config.has_primary or config.has_secondary):
        print_colored("⚠️  No weather API keys set: every forecast will be simulated.", "yellow")
    print(f"  Overall reliability: {scorer.overall_reliability(config)}")

def main():
    print_colored("🚀 Starting AgriWeather Backend...", "blue")

    if not Path("agriweather/main.py").exists():
        print_colored("❌ Error: agriweather/main.py not found. Please run this script from the backend directory.", "red")
        sys.exit(1)

    if not Path(".env").exists() and not Path("../.env").exists():
        print_colored("⚠️  Warning: no .env file found. Optional variables:", "yellow")
        print("  OPENWEATHER_API_KEY=...   (primary source and geocoding)")
        print("  WEATHERAPI_KEY=...        (secondary source)")
        print("  STORAGE_MODE=local|mongodb")
        print("  LOGGER=20")

    print_colored("🔍 Checking weather sources...", "blue")
    report_weather_sources()

    if os.environ.get("STORAGE_MODE", "local") == "mongodb":
        print_colored("🔍 Checking MongoDB connection...", "blue")
        if not check_port_open("localhost", 27017):
            print_colored("⚠️  Warning: MongoDB doesn't appear to be running on localhost:27017", "yellow")
            print("Alerts will not be stored until MongoDB is reachable.")

    print_colored("✅ All checks passed!", "green")
    print_colored("🌐 Starting Uvicorn server...", "blue")
    print("📍 Backend will be available at: http://localhost:8000")
    print("📍 API Documentation: http://localhost:8000/docs")
    print()

    try:
        subprocess.run([
            sys.executable, "-m", "uvicorn",
            "agriweather.main:app",
            "--reload",
            "--host", "0.0.0.0",
            "--port", "8000"
        ], check=True)
    except KeyboardInterrupt:
        print_colored("\n👋 Backend server stopped.", "yellow")
    except subprocess.CalledProcessError as e:
        print_colored(f"\n❌ Error starting server: {e}", "red")
        sys.exit(1)

if __name__ == "__main__":
    main()
