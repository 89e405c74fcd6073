"""
BNFuzzer: random message generator driven by BNF/ABNF grammars
"""

__version__ = "0.2.0"
__author__ = "BNFuzzer Development Team"
