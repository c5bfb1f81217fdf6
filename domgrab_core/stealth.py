#!/usr/bin/env python3
from typing import List, Sequence

VIEWPORT = {"width": 1280, "height": 720}


class StealthConfig:
    """Launch flags and client identity for the per-request browser"""
    def get_chrome_args(self) -> List[str]:
        return [
            '--no-sandbox',
            '--disable-setuid-sandbox',
            '--disable-dev-shm-usage',
            '--disable-accelerated-2d-canvas',
            '--disable-gpu',
            '--use-gl=swiftshader',
            f"--window-size={VIEWPORT['width']},{VIEWPORT['height']}",
            '--font-render-hinting=none',
            '--no-first-run',
            '--no-default-browser-check',
        ]

    def get_extension_args(self, extension_paths: Sequence[str]) -> List[str]:
        paths = [p for p in extension_paths if p]
        if not paths:
            return []
        joined = ",".join(paths)
        return [
            f"--disable-extensions-except={joined}",
            f"--load-extension={joined}",
        ]

    def get_user_agent(self) -> str:
        return (
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
            "AppleWebKit/537.36 (KHTML, like Gecko) "
            "Chrome/131.0.0.0 Safari/537.36"
        )
