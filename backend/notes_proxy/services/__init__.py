# Services package init
"""
Notes Proxy — Services Layer
=============================

What:  Business logic sitting between the HTTP adapters and the Gemini API.
How:   Services accept decoded request bodies, apply validation and prompt
       construction, and return response models or raise typed exceptions.

Service Inventory:
    - validation:      Body decoding and field checks
    - prompt_builder:  Mode → prompt template rendering (pure)
    - LLMService:      Interface for text generation providers
    - GeminiService:   Concrete implementation using the Google Gemini API
    - ProxyService:    Orchestrates validate → prompt → generate
"""
