# minirt

A compact ray tracer. It reads a scene description in the `.rt` format and
renders it with Phong lighting, hard shadows, checkerboard textures, and
image textures with optional normal maps. The result is written to an image
file.

## Installation

```
pip install .
```

Pillow is the only runtime dependency. It loads texture images and writes the
rendered picture.

## Usage

```
minirt scene.rt
```

This renders `scene.rt` and saves the picture next to it as `scene.png`.

Options:

- `-o FILE`, `--output FILE`: the image file to write. Pillow chooses the
  format from the file extension.
- `--width N`, `--height N`: the image size in pixels. Both default to 1000,
  and each must be at least 2.

Exactly one scene file must be given, and its name must end in `.rt`. When the
scene cannot be read or rendered, the command prints `Error` and a message on
standard error and exits with status 1. On success it exits with status 0.

## Scene format

Each non-empty line describes one element. Fields are separated by spaces or
tabs, and vectors are written as `x,y,z` with no spaces.

| Id   | Element       | Fields                                                    |
|------|---------------|-----------------------------------------------------------|
| `A`  | ambient light | ratio `[0,1]`, colour `r,g,b`                             |
| `C`  | camera        | position, orientation `[-1,1]`, horizontal FOV `[0,180)`  |
| `L`  | point light   | position, brightness `[0,1]`, colour `r,g,b`              |
| `sp` | sphere        | centre, diameter, surface, kd, ks, ksn                    |
| `pl` | plane         | point, normal `[-1,1]`, surface, kd, ks, ksn              |
| `cy` | cylinder      | base centre, axis `[-1,1]`, diameter, height, surface, kd, ks, ksn |
| `co` | cone          | base centre, axis `[-1,1]`, diameter, height, surface, kd, ks, ksn |

A scene needs exactly one `A`, exactly one `C` and at least one `L`.

Colour components are whole numbers in `[0,255]`. Orientation and axis
vectors take components in `[-1,1]`, must not be all zero, and are normalised.
Diameters, heights and `ksn` must not be negative. Cylinders and cones are open
surfaces with no end caps. A cone's base lies at its centre, and its tip lies
`height` along the axis.

The surface of an object takes one of three forms:

- `rgb R,G,B` gives a plain colour.
- `ck R,G,B R,G,B WIDTH HEIGHT` gives a checkerboard with two colours and
  WIDTH by HEIGHT tiles across the surface coordinates.
- `bm texture.xpm [bump.xpm]` gives an image texture and, optionally, a
  normal map. Both names must end in `.xpm`. The images are decoded with
  Pillow.

`kd` and `ks` are the diffuse and specular coefficients in `[0,1]`. `ksn` is
the specular exponent.

### Example

```
A  0.2            255,255,255
C  0,0,5          0,0,-1        70
L  5,5,5          0.8           255,255,255
sp 0,0,0          2             rgb 200,40,40  0.8 0.5 64
pl 0,-1,0         0,1,0         ck 255,255,255 0,0,0 8 8  1 0 1
```

## Library use

```python
from minirt.elements import read_scene_file
from minirt.scene import build_scene
from minirt.render import render, to_image

width, height = 400, 400
scene = build_scene(read_scene_file("scene.rt"), width, height)
pixels = render(scene, width, height)      # 0xRRGGBB ints, top row first
to_image(pixels, width, height).save("scene.png")
```

The modules:

- `minirt.elements` splits scene lines into `Element` records.
- `minirt.values` converts text fields into numbers and `Vec3` values.
- `minirt.scene` builds a `Scene` with its camera, lights and objects.
- `minirt.geometry` holds `Ray`, `HitRecord` and the intersection routines.
- `minirt.shading` computes Phong lighting with `trace_ray`.
- `minirt.render` renders a scene and provides the command.

Parsing problems raise `minirt.errors.SceneError`. All of the package's own
errors derive from `minirt.errors.MiniRTError`.

## What it does not do

minirt does not open a window or show the picture on screen. It renders each
scene once and saves the result to an image file.