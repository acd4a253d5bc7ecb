#!/usr/bin/env python3
"""
Development server startup script
"""

import uvicorn

from printshop.core.config import settings

if __name__ == "__main__":
    print("Starting Print Shop Pricing API...")
    print(f"Server will be available at: http://localhost:{settings.PORT}")
    print(f"Quote endpoint: http://localhost:{settings.PORT}/api/v1/quotes/calculate")
    print("Press Ctrl+C to stop the server")

    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=True,
        log_level="info"
    )
