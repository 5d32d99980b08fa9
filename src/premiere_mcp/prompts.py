"""
Premiere Pro MCP Prompts

Templated editing workflows. Each renderer turns the client's string
arguments into a system/user/assistant conversation; missing optional
arguments fall back to the defaults below, and the tip tables fall back to
their default key for values they don't know.
"""

from typing import Dict, List, Tuple

from premiere_mcp.registry.prompts import (
    PromptArgument,
    PromptDefinition,
    PromptMessage,
    PromptRegistry,
    RenderedPrompt,
)

# -- tip tables --

COLOR_GRADING_TIPS = {
    "cinematic": "- Add subtle blue/orange color contrast\n   - Use film grain effect\n"
                 "   - Slightly desaturate overall\n   - Add gentle vignetting",
    "vibrant": "- Increase saturation selectively\n   - Enhance primary colors\n"
               "   - Boost contrast\n   - Use complementary color schemes",
    "moody": "- Lower overall brightness\n   - Enhance shadows and highlights\n"
             "   - Use teal/orange grading\n   - Add atmospheric effects",
    "natural": "- Maintain realistic color balance\n   - Subtle saturation boost\n"
               "   - Clean, neutral look\n   - Focus on exposure correction",
}

MULTICAM_SYNC_TIPS = {
    "timecode": "- Ensure all cameras have matching timecode\n   - Use external timecode generator if possible\n"
                "   - Check for timecode drift\n   - Verify frame rate consistency",
    "audio": "- Ensure all cameras recorded audio\n   - Use slate or clap for reference\n"
             "   - Check audio waveform alignment\n   - Account for audio/video sync offset",
    "markers": "- Add markers at sync points during recording\n   - Use flashbulb or visual cue\n"
               "   - Ensure markers are visible in all angles\n   - Manual sync verification may be needed",
}

SOCIAL_MEDIA_SPECS = {
    "Instagram": {
        "post": "- Aspect Ratio: 1:1 (square) or 4:5 (portrait)\n- Resolution: 1080x1080 or 1080x1350\n"
                "- Duration: Up to 60 seconds\n- Format: MP4 or MOV",
        "story": "- Aspect Ratio: 9:16 (vertical)\n- Resolution: 1080x1920\n"
                 "- Duration: Up to 15 seconds\n- Format: MP4 or MOV",
        "reel": "- Aspect Ratio: 9:16 (vertical)\n- Resolution: 1080x1920\n"
                "- Duration: Up to 90 seconds\n- Format: MP4",
    },
    "TikTok": {
        "default": "- Aspect Ratio: 9:16 (vertical)\n- Resolution: 1080x1920\n"
                   "- Duration: 15-60 seconds\n- Format: MP4\n- Frame Rate: 30fps",
    },
    "YouTube": {
        "short": "- Aspect Ratio: 9:16 (vertical)\n- Resolution: 1080x1920\n"
                 "- Duration: Up to 60 seconds\n- Format: MP4",
        "video": "- Aspect Ratio: 16:9 (landscape)\n- Resolution: 1920x1080 or 4K\n"
                 "- Duration: Variable\n- Format: MP4",
    },
}

PLATFORM_TIPS = {
    "Instagram": "- Use hashtags strategically\n   - Include captions for accessibility\n"
                 "   - Create thumb-stopping content\n   - Use brand colors consistently",
    "TikTok": "- Start with trending sounds\n   - Use quick cuts and transitions\n"
              "   - Add text overlays for context\n   - Create content that encourages interaction",
    "YouTube": "- Create compelling thumbnails\n   - Use clear titles and descriptions\n"
               "   - Include end screens and cards\n   - Optimize for search discovery",
}

DOCUMENTARY_STRUCTURE_TIPS = {
    "chronological": "- Follow events in time order\n   - Use dates and timestamps\n"
                     "   - Build toward climax or resolution\n   - Show cause and effect clearly",
    "thematic": "- Organize by topics or themes\n   - Use interviews to explore each theme\n"
                "   - Create smooth transitions between topics\n   - Build overall narrative arc",
    "character-driven": "- Focus on personal journeys\n   - Use character development\n"
                        "   - Show transformation over time\n   - Balance multiple perspectives",
}

COMMERCIAL_STRUCTURE_TIPS = {
    "15s": "- Hook: 0-2 seconds\n- Message: 2-12 seconds\n- CTA: 12-15 seconds\n"
           "- Every second counts - be concise",
    "30s": "- Hook: 0-3 seconds\n- Build: 3-20 seconds\n- Climax: 20-25 seconds\n- CTA: 25-30 seconds",
    "60s": "- Hook: 0-5 seconds\n- Story development: 5-45 seconds\n"
           "- Emotional peak: 45-50 seconds\n- CTA: 50-60 seconds",
}

COMMERCIAL_LENGTH_TIPS = {
    "15s": "- Focus on one key message\n- Use dynamic visuals\n- Strong opening essential\n"
           "- Immediate brand recognition",
    "30s": "- Standard commercial format\n- Time for story development\n"
           "- Balance message and emotion\n- Clear three-act structure",
    "60s": "- Room for detailed storytelling\n- Character development possible\n"
           "- Multiple benefits can be shown\n- Stronger emotional connection",
}

PERFORMANCE_TIPS = {
    "small": "- Basic optimization usually sufficient\n- Standard preview settings\n"
             "- Minimal proxy usage needed\n- Regular project maintenance",
    "medium": "- Use proxy workflow for 4K+\n- Optimize preview quality\n"
              "- Monitor system resources\n- Consider GPU acceleration",
    "large": "- Mandatory proxy workflow\n- Team Projects for collaboration\n"
             "- Dedicated storage solutions\n- Advanced system optimization",
}

AUDIO_SOURCE_TIPS = {
    "microphone": "- Check for proximity effect\n   - Remove handling noise\n"
                  "   - Fix plosives and breath sounds\n   - Enhance presence frequencies",
    "phone": "- Enhance frequency range\n   - Remove compression artifacts\n"
             "   - Boost midrange for clarity\n   - Minimize digital distortion",
    "camera": "- Remove camera motor noise\n   - Fix automatic gain control issues\n"
              "   - Enhance dialogue frequencies\n   - Separate from camera noise",
}

AUDIO_PROBLEM_TIPS = {
    "background noise": "- Use adaptive noise reduction\n   - Apply gentle high-pass filter\n"
                        "   - Use expander/gate for pauses\n   - Spectral repair for specific sounds",
    "echo": "- Use DeReverb effect\n   - Apply EQ to reduce reflections\n"
            "   - Use compression carefully\n   - Manual editing for worst sections",
    "distortion": "- Use Declip effect\n   - Apply gentle compression\n"
                  "   - EQ to reduce harsh frequencies\n   - Consider re-recording if severe",
}


def lookup(table: Dict[str, str], key: str, fallback: str) -> str:
    return table.get(key, table[fallback])


def social_media_specs(platform: str, content_type: str) -> str:
    specs = SOCIAL_MEDIA_SPECS.get(platform, {})
    return specs.get(content_type) or specs.get("default") or "Standard HD specifications"


def _conversation(description: str, system: str, user: str, assistant: str) -> RenderedPrompt:
    return RenderedPrompt(description, (
        PromptMessage("system", system),
        PromptMessage("user", user),
        PromptMessage("assistant", assistant),
    ))


# -- renderers --

def create_video_project(args: Dict[str, str]) -> RenderedPrompt:
    project_type = args.get("project_type") or "general"
    duration = args.get("duration")
    length = f" that's {duration} long" if duration else ""
    return _conversation(
        f"Guide for creating a {project_type} video project",
        f"You are an expert video editor helping someone create a {project_type} video project "
        f"in Adobe Premiere Pro. Provide step-by-step guidance that is specific to their project "
        f"type and requirements.",
        f"I want to create a {project_type} video project{length}. "
        f"Can you guide me through the process step by step?",
        f"""I'll help you create a {project_type} video project. Here's a step-by-step workflow:

1. **Project Setup**
   - Create a new project with appropriate settings for {project_type}
   - Set up your project folder structure
   - Configure sequence settings for your target format

2. **Import and Organize**
   - Import your media files
   - Create bins to organize your footage
   - Review and log your footage

3. **Rough Cut**
   - Create your initial edit
   - Focus on story structure and pacing
   - Add basic transitions

4. **Fine Cut**
   - Refine your edit
   - Add effects and color correction
   - Sync and clean up audio

5. **Final Polish**
   - Add titles and graphics
   - Apply final color grade
   - Mix and master audio

6. **Export**
   - Choose appropriate export settings
   - Render and review final output

Would you like me to help you with any specific step?""",
    )


def edit_music_video(args: Dict[str, str]) -> RenderedPrompt:
    music_file = args.get("music_file") or "your music track"
    video_clips = args.get("video_clips") or "your video clips"
    return _conversation(
        "Workflow for editing a music video with beat synchronization",
        "You are a music video editor expert. Help the user create a compelling music video "
        "that syncs with the beat and tells a visual story.",
        f"I want to edit a music video using {music_file} and {video_clips}. How should I approach this?",
        """Here's a comprehensive workflow for editing your music video:

1. **Preparation**
   - Import your music track and video clips
   - Create a new sequence matching your footage specs
   - Place the music track on the timeline first

2. **Beat Mapping**
   - Listen to the music and mark beats with markers
   - Identify song structure (intro, verse, chorus, bridge, outro)
   - Note any tempo changes or key moments

3. **Rough Assembly**
   - Lay out video clips roughly matching the song structure
   - Focus on the overall flow and energy

4. **Beat Synchronization**
   - Cut video clips to match the beat
   - Use quick cuts during high-energy sections
   - Longer shots during verses or quieter moments
   - Sync key visual moments with musical accents

5. **Visual Enhancement**
   - Add effects that complement the music genre
   - Use color grading to match the mood
   - Consider speed ramping for dramatic effect

6. **Final Touches**
   - Add any text or graphics
   - Fine-tune the timing
   - Export with high-quality settings

Would you like detailed help with any of these steps?""",
    )


def color_grade_footage(args: Dict[str, str]) -> RenderedPrompt:
    footage_type = args.get("footage_type") or "standard"
    target_mood = args.get("target_mood") or "natural"
    log_tips = (
        "\n**LOG Footage Specific Tips:**\n"
        "- Apply a LUT as starting point\n"
        "- Work in the correct color space\n"
        "- Don't over-correct in the first pass\n"
        "- Use exposure before gain\n"
        if footage_type == "log" else ""
    )
    return _conversation(
        "Step-by-step color grading workflow",
        "You are a professional colorist. Guide the user through a comprehensive color grading "
        "workflow that will enhance their footage and achieve their desired look.",
        f"I have {footage_type} footage and want to achieve a {target_mood} look. "
        f"Can you guide me through the color grading process?",
        f"""Here's a professional color grading workflow for your {footage_type} footage:

1. **Preparation**
   - Apply Lumetri Color effect to your clips
   - Create adjustment layers for consistent grading

2. **Primary Correction** (Fix first)
   - Balance exposure (lift shadows, reduce highlights)
   - Correct white balance
   - Adjust contrast and saturation

3. **Secondary Correction** (Enhance)
   - Isolate and adjust specific colors
   - Enhance skin tones
   - Match shots for consistency

4. **Creative Grading** ({target_mood} look)
   {lookup(COLOR_GRADING_TIPS, target_mood, "natural")}

5. **Final Polish**
   - Fine-tune highlights and shadows
   - Check consistency across all shots
   - Export with proper color space
{log_tips}
Tools to use:
- Lumetri Color panel
- Lumetri Scopes (Vectorscope, Waveform, Histogram)
- Color wheels and curves
- HSL Secondary adjustments

Would you like specific guidance for any step?""",
    )


def multicam_editing(args: Dict[str, str]) -> RenderedPrompt:
    camera_count = args.get("camera_count") or "multiple"
    sync_method = args.get("sync_method") or "audio"
    check = {
        "timecode": "matching timecode",
        "audio": "clear audio",
    }.get(sync_method, "visible markers")
    return _conversation(
        "Guide for multicam editing workflow",
        "You are a multicam editing specialist. Help the user efficiently edit multicam footage "
        "with proper synchronization and smooth angle switching.",
        f"I have {camera_count} cameras and want to sync them using {sync_method}. "
        f"How do I set up multicam editing?",
        f"""Here's a complete multicam editing workflow:

1. **Preparation**
   - Import all camera angles
   - Organize footage by camera in separate bins
   - Check that all footage has {check}

2. **Create Multicam Source**
   - Select all camera angles
   - Right-click and choose "Create Multi-Camera Source Sequence"
   - Choose "{sync_method}" as sync method

3. **Sync Settings**
   {lookup(MULTICAM_SYNC_TIPS, sync_method, "audio")}

4. **Editing Workflow**
   - Use keyboard shortcuts (1-9) to switch angles
   - Cut first, then switch angles for efficiency
   - Monitor audio levels across all angles

5. **Fine-tuning**
   - Adjust sync if needed (slip clips)
   - Color match between cameras
   - Fix any audio issues

**Keyboard Shortcuts:**
- 1-9: Switch to camera angle
- Shift+1-9: Switch audio only

Would you like help with any specific aspect of multicam editing?""",
    )


def podcast_editing(args: Dict[str, str]) -> RenderedPrompt:
    participants = args.get("participant_count") or "multiple"
    episode_length = args.get("episode_length")
    target = f" targeting {episode_length}" if episode_length else ""
    return _conversation(
        "Workflow for editing podcast episodes",
        "You are a podcast production expert. Help the user create a polished podcast episode "
        "with clean audio and good pacing.",
        f"I need to edit a podcast with {participants} participants{target}. What's the best workflow?",
        """Here's a professional podcast editing workflow:

1. **Setup and Import**
   - Create sequence with audio-focused settings
   - Import all participant tracks
   - Set up audio track layout (one per participant)

2. **Audio Cleanup**
   - Apply noise reduction (DeNoise or similar)
   - Remove mouth sounds, coughs, long pauses
   - Normalize audio levels

3. **Content Editing**
   - Remove "um"s, "uh"s, false starts
   - Trim long pauses (leave natural rhythm)
   - Remove tangents or off-topic content

4. **Audio Processing**
   - Apply compression for consistent levels
   - Use EQ to enhance voice clarity
   - Add de-esser for harsh S sounds
   - Set proper loudness levels (-16 LUFS for podcasts)

5. **Structure and Flow**
   - Add intro/outro music
   - Insert chapter markers if needed

6. **Final Polish**
   - Ensure consistent audio levels
   - Add fade-ins/fade-outs
   - Export in appropriate format (MP3, AAC)

**Export Settings:**
- Format: MP3 or AAC
- Sample Rate: 44.1 kHz
- Bitrate: 128-192 kbps

Would you like specific guidance on any of these steps?""",
    )


def social_media_content(args: Dict[str, str]) -> RenderedPrompt:
    platform = args.get("platform") or "Instagram"
    content_type = args.get("content_type") or "post"
    platform_tips = PLATFORM_TIPS.get(platform, "Create engaging, platform-appropriate content")
    return _conversation(
        f"Create {content_type} content optimized for {platform}",
        f"You are a social media content creator expert. Help the user create engaging "
        f"{content_type} content specifically optimized for {platform}.",
        f"I want to create {content_type} content for {platform}. "
        f"What are the best practices and technical specs?",
        f"""Here's how to create optimized {content_type} content for {platform}:

**Technical Specifications:**
{social_media_specs(platform, content_type)}

**Content Strategy:**
1. **Hook (First 3 seconds)**
   - Start with attention-grabbing visuals
   - Use text overlays for context

2. **Storytelling**
   - Keep it concise and engaging
   - Include call-to-action elements

3. **Visual Style**
   - High contrast for mobile viewing
   - Large, readable text

4. **Platform-Specific Tips:**
   {platform_tips}

**Export Settings:**
- Format: H.264
- Quality: High
- Frame Rate: Match source or 30fps
- Audio: AAC, 192kbps

Would you like specific help with any aspect of this workflow?""",
    )


def documentary_editing(args: Dict[str, str]) -> RenderedPrompt:
    interviews = args.get("interview_count") or "multiple"
    structure = args.get("narrative_structure") or "thematic"
    return _conversation(
        "Workflow for documentary film editing",
        "You are a documentary editor expert. Help the user craft a compelling documentary "
        "that tells a clear story with strong narrative structure.",
        f"I'm editing a documentary with {interviews} interviews using a {structure} structure. "
        f"What's the best approach?",
        f"""Here's a comprehensive documentary editing workflow:

1. **Organization and Review**
   - Create bins for interviews, B-roll, archival footage
   - Identify key soundbites and moments

2. **Story Structure ({structure})**
   {lookup(DOCUMENTARY_STRUCTURE_TIPS, structure, "thematic")}

3. **Paper Edit**
   - Create rough outline of story beats
   - Map emotional arc of the story

4. **Rough Assembly**
   - Start with audio-only edit of interviews
   - Create "string-out" of best moments

5. **B-roll Integration**
   - Use cutaways to hide interview edits
   - Maintain authenticity and accuracy

6. **Refining and Polishing**
   - Add music and sound design
   - Add titles and lower thirds

**Key Techniques:**
- Use L-cuts and J-cuts for natural flow
- Use reaction shots effectively
- Build tension and release

Would you like detailed guidance on any specific aspect?""",
    )


def commercial_editing(args: Dict[str, str]) -> RenderedPrompt:
    length = args.get("commercial_length") or "30s"
    product = args.get("product_type")
    subject = f" for {product}" if product else ""
    return _conversation(
        "Guide for editing commercial advertisements",
        "You are a commercial editor expert. Help the user create compelling advertisements "
        "that effectively communicate the brand message and drive action.",
        f"I'm editing a {length} commercial{subject}. What's the most effective approach?",
        f"""Here's a strategic approach for editing your {length} commercial:

**Commercial Structure:**
{lookup(COMMERCIAL_STRUCTURE_TIPS, length, "30s")}

**Key Editing Principles:**
1. **Opening Hook (First 2-3 seconds)**
   - Grab attention immediately
   - Establish brand or product quickly

2. **Message Delivery**
   - Communicate key benefits clearly
   - Build emotional connection with audience

3. **Call to Action**
   - Clear, compelling CTA
   - Reinforce brand message

**Technical Requirements:**
- Export for broadcast specifications
- Multiple versions (TV, web, social)
- Closed captions for accessibility

**{length} Specific Tips:**
{lookup(COMMERCIAL_LENGTH_TIPS, length, "30s")}

Would you like specific guidance on any aspect of commercial editing?""",
    )


def optimize_workflow(args: Dict[str, str]) -> RenderedPrompt:
    size = args.get("project_size") or "medium"
    hardware = args.get("hardware_specs")
    with_hardware = f" with {hardware} hardware" if hardware else ""
    return _conversation(
        "Tips for optimizing Premiere Pro workflow and performance",
        "You are a Premiere Pro optimization expert. Help the user improve their workflow "
        "efficiency and system performance.",
        f"I'm working on {size} projects{with_hardware}. How can I optimize my Premiere Pro workflow?",
        f"""Here's how to optimize your Premiere Pro workflow for {size} projects:

**Project Organization:**
1. **File Structure**
   - Create consistent folder hierarchies
   - Separate media, projects, and exports

2. **Premiere Pro Setup**
   - Organize bins logically
   - Set up keyboard shortcuts for common actions

**Performance Optimization:**
{lookup(PERFORMANCE_TIPS, size, "medium")}

**Workflow Efficiency:**
1. **Proxy Workflow**
   - Use proxies for 4K/8K footage
   - Edit with low-res, finish with high-res

2. **Render Management**
   - Use in-to-out rendering
   - Export queue management

**Maintenance:**
- Regular cache cleaning
- Plugin management

Would you like specific guidance on any optimization area?""",
    )


def audio_cleanup(args: Dict[str, str]) -> RenderedPrompt:
    issues = args.get("audio_issues") or "general noise"
    source = args.get("audio_source") or "microphone"
    return _conversation(
        "Guide for cleaning up and enhancing audio",
        "You are an audio post-production expert. Help the user clean up and enhance their "
        "audio to professional standards.",
        f"I have audio with {issues} recorded from {source}. "
        f"How can I clean it up and make it sound professional?",
        f"""Here's a comprehensive audio cleanup workflow for your {source} audio:

**Assessment and Planning:**
1. **Identify Issues**
   - {issues}
   - Background noise levels
   - Dynamic range issues

**Cleanup Process:**
1. **Noise Reduction**
   - Capture noise print from quiet section
   - Apply gentle reduction (50-70%)

2. **Spectral Editing**
   - Use Spectral Frequency Display
   - Fix mouth sounds and clicks

3. **{source} Specific Fixes**
   {lookup(AUDIO_SOURCE_TIPS, source, "microphone")}

4. **Problem-Specific Solutions**
   {lookup(AUDIO_PROBLEM_TIPS, issues, "background noise")}

**Enhancement Techniques:**
- EQ: remove mud (200-300 Hz), enhance clarity (2-5 kHz)
- Gentle compression (3:1 ratio), de-esser, limiter

**Tools in Premiere Pro:**
- Essential Sound panel
- Audition integration

Would you like specific guidance on any audio issue?""",
    )


def _definition(name: str, description: str, *arguments: Tuple[str, str, bool]) -> PromptDefinition:
    return PromptDefinition(
        name=name,
        description=description,
        arguments=tuple(PromptArgument(arg, desc, required) for arg, desc, required in arguments),
    )


PROMPTS: List[Tuple[PromptDefinition, object]] = [
    (_definition(
        "create_video_project", "Guide to create a new video project from scratch",
        ("project_type", 'Type of video project (e.g., "social media", "documentary", "commercial")', True),
        ("duration", "Expected duration of the final video", False),
    ), create_video_project),
    (_definition(
        "edit_music_video", "Workflow for editing a music video with beat synchronization",
        ("music_file", "Path to the music file", True),
        ("video_clips", "List of video clip paths", True),
    ), edit_music_video),
    (_definition(
        "color_grade_footage", "Step-by-step color grading workflow",
        ("footage_type", 'Type of footage (e.g., "log", "standard", "raw")', True),
        ("target_mood", 'Desired mood or look (e.g., "cinematic", "vibrant", "moody")', False),
    ), color_grade_footage),
    (_definition(
        "multicam_editing", "Guide for multicam editing workflow",
        ("camera_count", "Number of camera angles", True),
        ("sync_method", "Method for syncing cameras (timecode, audio, markers)", True),
    ), multicam_editing),
    (_definition(
        "podcast_editing", "Workflow for editing podcast episodes",
        ("participant_count", "Number of participants in the podcast", True),
        ("episode_length", "Target length of the episode", False),
    ), podcast_editing),
    (_definition(
        "social_media_content", "Create content optimized for social media platforms",
        ("platform", "Target platform (Instagram, TikTok, YouTube, etc.)", True),
        ("content_type", "Type of content (story, post, reel, etc.)", True),
    ), social_media_content),
    (_definition(
        "documentary_editing", "Workflow for documentary film editing",
        ("interview_count", "Number of interview subjects", True),
        ("narrative_structure", "Narrative structure (chronological, thematic, etc.)", False),
    ), documentary_editing),
    (_definition(
        "commercial_editing", "Guide for editing commercial advertisements",
        ("commercial_length", "Length of the commercial (15s, 30s, 60s, etc.)", True),
        ("product_type", "Type of product being advertised", False),
    ), commercial_editing),
    (_definition(
        "optimize_workflow", "Tips for optimizing Premiere Pro workflow and performance",
        ("project_size", "Size of the project (small, medium, large)", True),
        ("hardware_specs", "Hardware specifications", False),
    ), optimize_workflow),
    (_definition(
        "audio_cleanup", "Guide for cleaning up and enhancing audio",
        ("audio_issues", "Specific audio issues to address", True),
        ("audio_source", "Source of the audio (microphone, phone, etc.)", False),
    ), audio_cleanup),
]


def build_prompt_registry() -> PromptRegistry:
    return PromptRegistry(PROMPTS)
