from .minimap import export_rgba, minimap_surface, save_minimap

__all__ = ['export_rgba', 'minimap_surface', 'save_minimap']
