"""Centralized imports for the entire project (app + accessibility_merger)."""

# Standard library
import asyncio
import logging
import os
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

# External
from dotenv import load_dotenv
from fastapi import Request
from fastapi.responses import JSONResponse
from openai import OpenAI
