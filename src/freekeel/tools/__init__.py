"""
Tools module for FreeKeel
Contains the annotation tools
"""
from .base_tool import BaseTool, ToolType
from .drawing_tools import PenTool
from .text_tool import TextTool

__all__ = [
    'BaseTool',
    'ToolType',
    'PenTool',
    'TextTool'
]
