"""
Notes Proxy — Package Initializer
==================================

A thin backend for the notes app: forwards note text to Google Gemini for
revision or synthesis and relays the generated text back.

Architecture Note:

    ┌─────────────────────────────────────┐
    │  Adapters: main.py / function_app   │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │  Services: validation, prompts,     │  ← Request rules, prompt templates
    │            ProxyService             │
    ├─────────────────────────────────────┤
    │  Provider: GeminiService            │  ← One outbound call per request
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
