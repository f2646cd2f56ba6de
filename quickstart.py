#!/usr/bin/env python3
"""
Quick Start Script for the AutoCare Workshop API
Starts the server, waits for the health check and keeps it running.
"""

import os
import subprocess
import sys
import time

import requests

PORT = int(os.environ.get("PORT", 8000))
HEALTH_URL = f"http://localhost:{PORT}/health"


def check_dependencies():
    try:
        import fastapi  # noqa: F401
        import sqlalchemy  # noqa: F401
        import aiosqlite  # noqa: F401
        import uvicorn  # noqa: F401
        import jinja2  # noqa: F401
    except ImportError as e:
        print(f"❌ Missing dependency: {e}")
        print("Please run: pip install -e .")
        return False
    print("✅ All dependencies found")
    return True


def wait_until_healthy(retries=20, delay=0.5):
    for _ in range(retries):
        try:
            response = requests.get(HEALTH_URL, timeout=2)
            if response.status_code == 200:
                return response.json()
        except requests.RequestException:
            pass
        time.sleep(delay)
    return None


def quick_start():
    print("🚀 Quick Starting AutoCare Workshop...\n")

    if not check_dependencies():
        return 1

    process = subprocess.Popen([
        sys.executable, "-m", "uvicorn", "autocare.main:app",
        "--host", "0.0.0.0", "--port", str(PORT),
    ])
    print("⏳ Starting backend...")

    try:
        health = wait_until_healthy()
        if health is None:
            print("❌ Backend failed to start")
            return 1

        print(f"✅ Backend started successfully! (database: {health['database']})")
        print("\n🔧 Available endpoints:")
        print(f"   - {HEALTH_URL}")
        print(f"   - http://localhost:{PORT}/api/v1/auth/login")
        print(f"   - http://localhost:{PORT}/docs")
        print("\n🔑 Default staff PIN: 1234 (set DEFAULT_STAFF_PIN to change it)")
        print("\nPress Ctrl+C to stop")

        try:
            while process.poll() is None:
                time.sleep(1)
        except KeyboardInterrupt:
            print("\n🛑 Shutting down...")
        return 0
    finally:
        process.terminate()
        process.wait(timeout=10)


if __name__ == "__main__":
    sys.exit(quick_start())
