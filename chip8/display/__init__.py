"""Display subsystem for the CHIP-8 interpreter."""

from .framebuffer import HEIGHT, WIDTH, Framebuffer, PixelView

__all__ = ["Framebuffer", "PixelView", "WIDTH", "HEIGHT"]
