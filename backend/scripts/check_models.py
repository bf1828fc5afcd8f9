"""
List the Gemini models this GEMINI_API_KEY can call with generateContent.

Run from backend with:
  python scripts/check_models.py

Useful when MODEL_EXTRACTION points at a model the key is not allowed to use.
"""

import os
import sys

try:
    from dotenv import load_dotenv
    load_dotenv(".env.local")
    load_dotenv()
except ImportError:
    pass

from google import genai


def main() -> None:
    api_key = os.environ.get("GEMINI_API_KEY")
    if not api_key:
        print("GEMINI_API_KEY not found in env, .env.local or .env")
        sys.exit(1)

    print(f"Using API Key: {api_key[:10]}...")
    client = genai.Client(api_key=api_key)

    try:
        models = list(client.models.list())
    except Exception as e:
        print(f"Error listing models: {e}")
        sys.exit(1)

    generate_models = [m for m in models if "generateContent" in (m.supported_actions or [])]

    print("\nAvailable Models for this API Key:")
    for m in generate_models:
        print(f"- {m.name.replace('models/', '')}")

    if not generate_models:
        print("\nNo models support 'generateContent'. This key might be restricted.")


if __name__ == "__main__":
    main()
