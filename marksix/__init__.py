"""
Mark Six Progressive-Learning Predictor

Modules:
- store: historical draw store backed by a JSON snapshot
- fetcher: HKJC GraphQL results client
- strategies: the four back-test prediction strategies plus the fallback
- scoring: match-based accuracy for a predicted draw
- backtester: progressive-learning back-test engine
- aggregator: run-level statistics over case results
- predictor: next-draw prediction with fallback
- service: request-level operations used by the dashboard and scripts
"""

__version__ = "1.0.0"
