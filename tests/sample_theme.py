"""
Shared theme text for the tests. Mixes quote styles, attribute order, spacing,
a comment, an unnamed Color, a system color and a malformed Source.
"""

SAMPLE = """<?xml version="1.0" encoding="utf-8"?>
<Themes>
  <!-- <Background Type="CT_RAW" Source="FF102030" /> disabled -->
  <Theme Name="Dark" GUID="{1ded0138-47ce-435e-84ef-9ec1f439b749}">
    <Category Name="Environment" GUID="{624ed9c3-bdfd-41fa-96c3-7c824ea32e3d}">
      <Color Name="Title">
        <Background Type="CT_RAW" Source="FF102030" />
        <Foreground   Source='80FFFFFF'  Type='CT_RAW'/>
      </Color>
      <Color Name="Panel &amp; Frame">
        <Background Source="40102030" Type="CT_RAW" />
      </Color>
      <Color>
        <Foreground Type="CT_SYSCOLOR" Source="00000005" />
        <Background Type="CT_RAW" Source="FF10203" />
      </Color>
    </Category>
    <Category Name="Editor">
      <Color Name="Caret"><Foreground Type="CT_RAW" Source="ff112131"/></Color>
    </Category>
  </Theme>
</Themes>
"""

# SAMPLE after replacing #102030 with itself as target: the first element takes the
# first free corner of the radius-1 shell ((17,33,49) is the Caret), the second the next.
SAMPLE_REPLACED = SAMPLE.replace(
    'Source="FF102030" />\n        <Foreground', 'Source="FF11212F" />\n        <Foreground'
).replace('"40102030"', '"40111F31"')


def color_theme(colors: list[str]) -> str:
    """One category, one Color per AARRGGBB value, named c0, c1, ..."""
    body = "".join(
        f'    <Color Name="c{i}">\n      <Background Type="CT_RAW" Source="{value}" />\n    </Color>\n'
        for i, value in enumerate(colors)
    )
    return f'<Themes><Theme Name="T">\n  <Category Name="Cat">\n{body}  </Category>\n</Theme></Themes>\n'
