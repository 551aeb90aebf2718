"""AI Advisory - conversational front-end for long-running business analysis.

Import from submodules directly:
    from advisory.agent import AdvisoryOrchestrator, AnalysisClient
    from advisory.models import Message, AnalysisResult
    from advisory.gateway import create_app
"""

__version__ = "0.1.0"
