"""
Point d'entrée pour `python -m puter_proxy`.
"""
import argparse

import uvicorn


def main():
    """Fonction principale."""
    parser = argparse.ArgumentParser(description="Puter Proxy")
    parser.add_argument("--host", default="0.0.0.0", help="Host (défaut: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8000, help="Port (défaut: 8000)")
    parser.add_argument("--reload", action="store_true", help="Activer le reload auto")

    args = parser.parse_args()

    print(f"🚀 Démarrage du Puter Proxy sur {args.host}:{args.port}")

    uvicorn.run(
        "puter_proxy.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload
    )


if __name__ == "__main__":
    main()
