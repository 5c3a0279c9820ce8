"""
Agent implementations for ReviewLens.

Contains all agent modules that process reviews through the pipeline:
- Ingestion Agent
- Text Normalization Agent
- Weak Labeling Agent (keyword rules)
- Vocabulary Builder + Feature Projector
- Classifier Trainer/Evaluator
- Label Propagation Agent
- Label Summarizer
"""
