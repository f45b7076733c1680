"""
Services package - the explainer pipeline and its infrastructure

Pipeline:
    - pipeline/planning: problem statement to scene plan
    - pipeline/audio: narration tracks (speech or silence)
    - pipeline/animation: scene script assembly and rendering
    - pipeline/assembly: audio concatenation, muxing, delivery

Infrastructure:
    - infrastructure/llm: planning service provider
    - infrastructure/parsing: JSON recovery for model output
    - infrastructure/storage: per-request job directories

Use Cases:
    - use_cases: end-to-end orchestration
"""
