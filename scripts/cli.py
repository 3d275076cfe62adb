"""
CLI to analyze a still image -> JSON.
"""
from __future__ import annotations
import argparse, json
from facemood.config import Settings
from facemood.pipeline import analyze_image

def main():
    p = argparse.ArgumentParser()
    p.add_argument("--image", required=True, help="Path to input image")
    p.add_argument("--out", default="output/analysis.json", help="Path to output JSON")
    p.add_argument("--annotated", default=None, help="Optional path for the annotated image")
    args = p.parse_args()

    settings = Settings()
    result = analyze_image(args.image, settings, annotated_path=args.annotated).model_dump()
    print(json.dumps(result, indent=2, ensure_ascii=False))

    # Also write to file
    import os
    os.makedirs(os.path.dirname(args.out) or ".", exist_ok=True)
    with open(args.out, "w", encoding="utf-8") as f:
        json.dump(result, f, indent=2, ensure_ascii=False)
    print(f"Analysis written to {args.out}")

if __name__ == "__main__":
    main()
