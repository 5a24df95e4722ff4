"""
Quick demo script to run the FireSync API locally.

This script starts a local server and shows how to make requests to the endpoints.
"""

import uvicorn

if __name__ == "__main__":
    print("=" * 60)
    print("Starting FireSync Backend Demo")
    print("=" * 60)
    print()
    print("📌 API Endpoints:")
    print("   - Health Check:  GET  http://localhost:8000/health")
    print("   - Personalized:  POST http://localhost:8000/recommendations/personalized")
    print("   - Search:        POST http://localhost:8000/recommendations/search")
    print("   - Surprise:      POST http://localhost:8000/recommendations/surprise")
    print("   - Group:         POST http://localhost:8000/recommendations/group")
    print("   - Group (full):  POST http://localhost:8000/recommendations/group/profiles")
    print("   - Analysis:      POST http://localhost:8000/analysis/watch-patterns")
    print("   - API Docs:           http://localhost:8000/docs")
    print()
    print("🔑 Requires GOOGLE_API_KEY in your .env file")
    print()
    print("📝 Test with curl:")
    print('   curl -X POST "http://localhost:8000/recommendations/search" \\')
    print('     -H "Content-Type: application/json" \\')
    print('     -d \'{"userQuery": "a movie about a friendly robot", "mood": "Happy", '
          '"timeOfDay": "Evening", "viewingHistory": [], "contentType": "MOVIES"}\'')
    print()
    print("=" * 60)
    print("Starting server on http://localhost:8000")
    print("Press Ctrl+C to stop")
    print("=" * 60)
    print()

    uvicorn.run(
        "firesync.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
