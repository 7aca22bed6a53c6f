# wirefdf

`wirefdf` draws a `.fdf` height map as an isometric wireframe in a 1280x720 window, using pygame for the screen and input.

## Installing

    pip install .

To install pytest along with the package, add the `test` extra:

    pip install .[test]

## Running the viewer

    wirefdf maps/42.fdf

The command takes exactly one argument, the name of a file that ends in `.fdf`. When the viewer cannot start, it exits with status 1. This happens in these cases:

- There is no argument, or there is more than one. Nothing is printed.
- The name does not end in `.fdf`. It prints `is_fdf_file: Invalid file type.`
- The file cannot be read, is empty, or holds an entry that is not a valid number. It prints the reason.
- The display cannot be opened. It prints the reason.

### The map format

Each line of the file is one row of the grid. Entries are separated by spaces, and each entry is an integer height. An entry may have a sign and may be surrounded by whitespace. Its magnitude must not exceed 2147483647.

An entry may carry more data after a comma, as in `10,0xFF0000`. Only the height before the comma is read. The widest line sets the width of the grid, and shorter rows are filled with zeros.

### Controls

Keys act when they are released.

| Input                 | Action                                 |
|-----------------------|----------------------------------------|
| Esc / close window    | quit                                   |
| W, S, A, D / arrows   | move the view by 20 pixels             |
| R / F                 | change the tilt by -5 / +5 degrees     |
| Q / E                 | raise / lower the height scale by 0.1  |
| scroll up / down      | zoom in / out by 1 (not below zoom 1)  |
| Space                 | restore the starting view              |

The starting view uses these settings:

- zoom 10
- height scale 0.1
- both angles 30 degrees
- no offset

### What it does not do

- The wireframe is always drawn in white. Colours written after a comma in the map are ignored.
- XPM images can be loaded, but the viewer does not use them.
- A `none` (transparent) XPM colour is stored as the pixel value `0xFF000000`. It is not applied as a mask.

## Using it as a library

Most modules can be used without opening a window:

- `wirefdf.mapfile`
  - `parse_map(path)` and `parse_map_lines(lines)` return a `HeightMap` with `width`, `height`, `heights` and `at(x, y)`.
  - Bad input raises `MapError`, which is a `ValueError`.
  - Helpers: `parse_int`, `count_width` and `trim_trailing_whitespace`.
- `wirefdf.projection`
  - `View` holds zoom, height scale, offsets and angles. Its methods are `reset`, `move`, `rotate`, `change_z_scale`, `zoom_in` and `zoom_out`.
  - `project_point` projects one point.
  - `project_grid(view, heightmap, width, height)` projects the whole map and centres it, giving integer screen points.
- `wirefdf.raster`
  - `bresenham(x0, y0, x1, y1)` yields the pixels of a line.
  - `grid_segments(points)` yields the neighbour pairs of a grid.
  - `render(image, points, color)` draws the wireframe.
- `wirefdf.image.Image(width, height, bits_per_pixel, big_endian)` is a pixel buffer.
  - Rows are padded to 32 bits.
  - It has `put_pixel`, `get_pixel`, `clear` and `to_rgb`.
  - Writes outside the image are ignored.
- `wirefdf.xpm`
  - `read_xpm(path)`, `xpm_from_text(text)` and `parse_xpm(lines)` load XPM pictures into an `Image`.
  - Bad input raises `XpmError`.
- `wirefdf.colors.lookup_color(name, suffix)` resolves X11 colour names and `#rrggbb` values.
- `wirefdf.visual`
  - `channel_shifts` reads the channel layout from colour masks.
  - `convert_color` turns a `0xRRGGBB` colour into a pixel value for a given depth.

Windows and events are handled by two modules:

- `wirefdf.display.Display` opens pygame windows.
  - It has `new_window`, `destroy_window`, `put_image`, `pixel_put`, `string_put`, `clear_window`, `screen_size`, `flush_events`, `loop` and `close`.
  - It can be used as a context manager.
- `wirefdf.events`
  - `EventHooks` keeps the callbacks of each window.
  - `EventLoop` delivers `Event` objects to those callbacks.
- `wirefdf.app.FdfApp(path)` is the viewer itself, and `wirefdf.app.main` is the command.

This example projects a small map and draws it into an image:

```python
from wirefdf.image import Image
from wirefdf.mapfile import parse_map_lines
from wirefdf.projection import View, project_grid
from wirefdf.raster import render

heights = parse_map_lines(["0 0 0\n", "0 10 0\n", "0 0 0\n"])
view = View()
points = project_grid(view, heights, 1920, 1080)
image = Image(1920, 1080, 32, False)
render(image, points, 0xFFFFFF)
```