from . import config, kernel, provision, repos

__all__ = ['config', 'kernel', 'provision', 'repos']
