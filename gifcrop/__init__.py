from gifcrop.animation import Animation, CropRect, Frame
from gifcrop.crop import crop_animation, crop_frame
from gifcrop.errors import CodecFailure, GifCropError, InvalidRegion, PaletteLookupFailure

__version__ = "1.0.0"
